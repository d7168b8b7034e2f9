"""
Credential store over the donor, medicalStaff and admin tables.

The three tables are independent and keyed by email. A record carries no
role; callers attach the role of whichever table they queried.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.exceptions import DuplicateEmail, StoreError
from backend.models.admin import Admin
from backend.models.donor import Donor
from backend.models.medical_staff import MedicalStaff
from backend.models.question import Question

logger = logging.getLogger(__name__)


class Role(str, Enum):
    DONOR = "donor"
    MEDICAL_STAFF = "medical-staff"
    ADMIN = "admin"


class CredentialPolicy(str, Enum):
    HASHED = "hashed"
    LEGACY_PLAINTEXT = "legacy-plaintext"


MODEL_BY_ROLE = {
    Role.DONOR: Donor,
    Role.MEDICAL_STAFF: MedicalStaff,
    Role.ADMIN: Admin,
}


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str
    email: str
    password: str
    date_of_birth: date | None


class CredentialStore:
    def __init__(self, db: Session, allow_plaintext_credentials: bool = False):
        self.db = db
        self.allow_plaintext_credentials = allow_plaintext_credentials

    def credential_policy(self, role: Role) -> CredentialPolicy:
        if role is Role.DONOR or not self.allow_plaintext_credentials:
            return CredentialPolicy.HASHED
        return CredentialPolicy.LEGACY_PLAINTEXT

    def find_by_email(self, role: Role, email: str) -> UserRecord | None:
        model = MODEL_BY_ROLE[role]
        try:
            row = self.db.execute(select(model).where(model.email == email)).scalars().first()
        except SQLAlchemyError as exc:
            raise StoreError("Error querying database.") from exc

        if row is None:
            return None
        return UserRecord(
            id=row.id,
            name=row.name,
            email=row.email,
            password=row.password,
            date_of_birth=row.date_of_birth,
        )

    def insert(self, role: Role, name: str, email: str, password: str, date_of_birth: date) -> int:
        model = MODEL_BY_ROLE[role]
        row = model(name=name, email=email, password=password, date_of_birth=date_of_birth)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Rejected duplicate %s email on insert", role.value)
            raise DuplicateEmail() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Error saving {role.value} to database.") from exc
        return row.id


def fetch_questions(db: Session) -> list[dict]:
    """Return every question row keyed by its column names."""
    try:
        table = Question.__table__
        rows = db.execute(select(table).order_by(table.c.questionID)).mappings().all()
    except SQLAlchemyError as exc:
        raise StoreError("Error fetching questions.") from exc
    return [dict(row) for row in rows]
