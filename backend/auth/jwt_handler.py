from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from backend.core.config import Settings


@dataclass(frozen=True)
class SessionClaim:
    id: int
    name: str
    email: str
    role: str

    def as_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}


def create_access_token(claim: SessionClaim, settings: Settings, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or settings.jwt_expires_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "sub": claim.email,
        "id": claim.id,
        "name": claim.name,
        "role": claim.role,
        "exp": now + timedelta(minutes=expire_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
