"""
Registration and sign-in.

Sign-in resolves a role by walking ``LOGIN_ORDER``: the first table that holds
the email decides the role, and only that record's credential is checked.
Tables further down the chain are never consulted, even when the password is
wrong, so an email present in two tables always binds to the earlier role.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from backend.auth import jwt_handler
from backend.auth.jwt_handler import SessionClaim
from backend.auth.passwords import (
    BCRYPT_MAX_PASSWORD_BYTES,
    CredentialVerifier,
    burn_verification,
    hash_password,
    verifier_for,
)
from backend.core.config import Settings
from backend.core.exceptions import DuplicateEmail, InvalidCredentials, ValidationError
from backend.store import CredentialStore, Role, UserRecord

logger = logging.getLogger(__name__)

LOGIN_ORDER = (Role.DONOR, Role.MEDICAL_STAFF, Role.ADMIN)


@dataclass(frozen=True)
class RoleResolver:
    role: Role
    lookup: Callable[[str], UserRecord | None]
    verifier: CredentialVerifier


@dataclass(frozen=True)
class LoginResult:
    user: dict
    role: Role
    access_token: str


def _require_text(*values: str | None) -> list[str]:
    cleaned = []
    for value in values:
        if value is None or not value.strip():
            raise ValidationError()
        cleaned.append(value.strip())
    return cleaned


def parse_date_of_birth(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError("Date of birth must be in YYYY-MM-DD format.") from exc


class Authenticator:
    def __init__(self, store: CredentialStore, settings: Settings):
        self.store = store
        self.settings = settings

    def resolution_chain(self) -> list[RoleResolver]:
        return [
            RoleResolver(
                role=role,
                lookup=lambda email, role=role: self.store.find_by_email(role, email),
                verifier=verifier_for(self.store.credential_policy(role)),
            )
            for role in LOGIN_ORDER
        ]

    def _prepare(self, name, email, password, dob) -> tuple[str, str, str, date]:
        name, email, dob_text = _require_text(name, email, dob)
        # Passwords are taken verbatim, surrounding whitespace included.
        if not password:
            raise ValidationError()
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes.")
        return name, email, password, parse_date_of_birth(dob_text)

    def register(self, name: str | None, email: str | None, password: str | None, dob: str | None) -> int:
        name, email, password, date_of_birth = self._prepare(name, email, password, dob)

        if self.store.find_by_email(Role.DONOR, email) is not None:
            raise DuplicateEmail()

        hashed = hash_password(password, self.settings.bcrypt_rounds)
        donor_id = self.store.insert(Role.DONOR, name, email, hashed, date_of_birth)
        logger.info("Registered donor %s", donor_id)
        return donor_id

    def register_admin(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        dob: str | None,
        created_by: SessionClaim | None = None,
    ) -> int:
        admin_id = self.provision(Role.ADMIN, name, email, password, dob)
        logger.info(
            "Admin %s created by %s",
            admin_id,
            created_by.id if created_by else "console",
        )
        return admin_id

    def provision(self, role: Role, name: str | None, email: str | None, password: str | None, dob: str | None) -> int:
        """Create an account without the donor pre-check; the unique index reports conflicts."""
        name, email, password, date_of_birth = self._prepare(name, email, password, dob)
        hashed = hash_password(password, self.settings.bcrypt_rounds)
        return self.store.insert(role, name, email, hashed, date_of_birth)

    def login(self, email: str | None, password: str | None) -> LoginResult:
        if not email or not email.strip() or not password:
            raise InvalidCredentials()
        email = email.strip()

        for resolver in self.resolution_chain():
            record = resolver.lookup(email)
            if record is None:
                continue
            if not resolver.verifier.verify(password, record.password):
                raise InvalidCredentials()
            return self._issue(record, resolver.role)

        burn_verification(password, self.settings.bcrypt_rounds)
        raise InvalidCredentials()

    def _issue(self, record: UserRecord, role: Role) -> LoginResult:
        claim = SessionClaim(id=record.id, name=record.name, email=record.email, role=role.value)
        token = jwt_handler.create_access_token(claim, self.settings)
        return LoginResult(user=claim.as_dict(), role=role, access_token=token)
