"""
Credential encoding and verification.

Every role stores bcrypt hashes. ``LegacyPlaintextVerifier`` exists for staff
and admin rows that predate hashing and is only selected while
``ALLOW_PLAINTEXT_CREDENTIALS`` is on.
"""
import hmac
import logging
from abc import ABC, abstractmethod
from functools import lru_cache

import bcrypt

from backend.core.exceptions import HashingError
from backend.store import CredentialPolicy

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_PASSWORD_BYTES = 72
BCRYPT_HASH_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str, rounds: int) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HashingError()
    try:
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")
    except (ValueError, TypeError) as exc:
        raise HashingError() from exc


def looks_like_bcrypt_hash(value: str) -> bool:
    return value.startswith(BCRYPT_HASH_PREFIXES)


class CredentialVerifier(ABC):
    @abstractmethod
    def verify(self, submitted: str, stored: str) -> bool:
        """Return True when ``submitted`` matches the ``stored`` credential."""


class BcryptVerifier(CredentialVerifier):
    def verify(self, submitted: str, stored: str) -> bool:
        encoded = submitted.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, stored.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False


class LegacyPlaintextVerifier(CredentialVerifier):
    def __init__(self):
        self._bcrypt = BcryptVerifier()

    def verify(self, submitted: str, stored: str) -> bool:
        if looks_like_bcrypt_hash(stored):
            return self._bcrypt.verify(submitted, stored)
        logger.warning("Verifying a plaintext credential; rehash this account.")
        return hmac.compare_digest(submitted.encode("utf-8"), stored.encode("utf-8"))


_VERIFIERS: dict[CredentialPolicy, CredentialVerifier] = {
    CredentialPolicy.HASHED: BcryptVerifier(),
    CredentialPolicy.LEGACY_PLAINTEXT: LegacyPlaintextVerifier(),
}


def verifier_for(policy: CredentialPolicy) -> CredentialVerifier:
    return _VERIFIERS[policy]


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("no-such-account", rounds)


def burn_verification(submitted: str, rounds: int) -> None:
    """Run one bcrypt check so an unknown email costs as much as a wrong password."""
    BcryptVerifier().verify(submitted, _dummy_hash(rounds))
