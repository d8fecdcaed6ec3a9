from ..db import Base
from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_set_id = Column(Integer, ForeignKey("quiz_sets.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(String, nullable=False)
    correct_answer = Column(String, nullable=False)
    # ordered list of strings, never null
    wrong_answers = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
