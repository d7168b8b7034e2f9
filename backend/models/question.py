"""Onboarding question model definitions."""

from sqlalchemy import Column, Integer, Text
from backend.database import Base


class Question(Base):
    """Represents an onboarding question shown to new donors."""
    __tablename__ = "question"

    id = Column("questionID", Integer, primary_key=True)
    text = Column("questionText", Text, nullable=False)
