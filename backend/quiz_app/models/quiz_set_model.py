"""
QuizSets Model
| Column | Type | Notes |
| :--- | :--- | :--- |
| `id` | INTEGER | Primary Key |
| `user_id` | INTEGER | FK -> users (owner) |
| `title` | VARCHAR | |
| `created_at` | TIMESTAMP | set by the database |

Questions reference quiz_sets.id with ON DELETE CASCADE.
"""
from ..db import Base
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func


class QuizSet(Base):
    __tablename__ = "quiz_sets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
