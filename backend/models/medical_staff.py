"""Medical staff model definitions."""

from sqlalchemy import Column, Date, Integer, String
from backend.database import Base


class MedicalStaff(Base):
    """Clinic staff member. Provisioned out-of-band, read-only over HTTP."""
    __tablename__ = "medicalStaff"

    id = Column("staffID", Integer, primary_key=True, index=True)
    name = Column("staffName", String(255), nullable=False)
    email = Column("staffEmail", String(255), unique=True, index=True, nullable=False)
    password = Column("staffPassword", String(255), nullable=False)
    date_of_birth = Column("staffDOB", Date, nullable=False)
