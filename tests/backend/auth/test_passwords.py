import bcrypt
import pytest

from backend.auth import passwords
from backend.auth.passwords import (
    BcryptVerifier,
    CredentialVerifier,
    LegacyPlaintextVerifier,
    hash_password,
    looks_like_bcrypt_hash,
    verifier_for,
)
from backend.core.exceptions import HashingError
from backend.store import CredentialPolicy


def test_hash_password_is_salted_and_verifiable() -> None:
    first = hash_password('pw123', rounds=4)
    second = hash_password('pw123', rounds=4)

    assert first != 'pw123'
    assert first != second
    assert looks_like_bcrypt_hash(first)
    assert first.startswith('$2b$04$')
    assert BcryptVerifier().verify('pw123', first)


def test_hash_password_rejects_input_bcrypt_would_truncate() -> None:
    with pytest.raises(HashingError) as exception_info:
        hash_password('x' * 73, rounds=4)

    assert exception_info.value.message == 'Error encrypting password.'


def test_hash_password_wraps_library_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_gensalt(rounds):
        raise ValueError('Invalid rounds')

    monkeypatch.setattr(passwords.bcrypt, 'gensalt', broken_gensalt)

    with pytest.raises(HashingError) as exception_info:
        hash_password('pw123', rounds=4)

    assert isinstance(exception_info.value.__cause__, ValueError)


def test_bcrypt_verifier_rejects_wrong_password_and_non_hash_values() -> None:
    stored = bcrypt.hashpw(b'pw123', bcrypt.gensalt(rounds=4)).decode()
    verifier = BcryptVerifier()

    assert not verifier.verify('wrong', stored)
    assert not verifier.verify('pw123', 'pw123')
    assert not verifier.verify('x' * 80, stored)


def test_legacy_verifier_accepts_plaintext_and_hashed_values() -> None:
    stored_hash = bcrypt.hashpw(b'pw123', bcrypt.gensalt(rounds=4)).decode()
    verifier = LegacyPlaintextVerifier()

    assert verifier.verify('legacy', 'legacy')
    assert not verifier.verify('Legacy', 'legacy')
    assert verifier.verify('pw123', stored_hash)
    # A hashed row must not be matched by submitting the hash itself.
    assert not verifier.verify(stored_hash, stored_hash)


def test_verifier_for_maps_each_policy() -> None:
    assert isinstance(verifier_for(CredentialPolicy.HASHED), BcryptVerifier)
    assert isinstance(verifier_for(CredentialPolicy.LEGACY_PLAINTEXT), LegacyPlaintextVerifier)


def test_credential_verifier_is_abstract() -> None:
    with pytest.raises(TypeError):
        CredentialVerifier()

    class IncompleteVerifier(CredentialVerifier):
        pass

    with pytest.raises(TypeError):
        IncompleteVerifier()
