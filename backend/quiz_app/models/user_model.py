from ..db import Base
from sqlalchemy import Column, Integer, String, DateTime, func


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, nullable=False, unique=True)
    # salted hash from PasswordHelper; rows created before hashing may still hold plaintext
    password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
