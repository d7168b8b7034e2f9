"""Donor model definitions."""

from sqlalchemy import Column, Date, Integer, String
from backend.database import Base


class Donor(Base):
    """A registered blood donor. The password column holds a bcrypt hash."""
    __tablename__ = "donor"

    id = Column("donorID", Integer, primary_key=True, index=True)
    name = Column("donorName", String(255), nullable=False)
    email = Column("donorEmail", String(255), unique=True, index=True, nullable=False)
    password = Column("donorPassword", String(255), nullable=False)
    date_of_birth = Column("donorDOB", Date, nullable=False)
