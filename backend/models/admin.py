"""Admin model definitions."""

from sqlalchemy import Column, Date, Integer, String
from backend.database import Base


class Admin(Base):
    """Represents an administrator account."""
    __tablename__ = "admin"

    id = Column("adminID", Integer, primary_key=True, index=True)
    name = Column("adminName", String(255), nullable=False)
    email = Column("adminEmail", String(255), unique=True, index=True, nullable=False)
    password = Column("adminPassword", String(255), nullable=False)
    date_of_birth = Column("adminDOB", Date, nullable=False)
