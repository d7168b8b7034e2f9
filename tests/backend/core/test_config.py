import dataclasses

import pytest

from backend.core import config
from backend.core.config import Settings, validate_runtime_config


@pytest.mark.parametrize(
    ('value', 'expected'),
    [('1', True), (' TRUE ', True), ('yes', True), ('on', True), ('0', False), ('off', False), (None, False)],
)
def test_get_bool_parses_common_flags(value, expected: bool) -> None:
    assert config._get_bool(value) is expected


def test_settings_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'load_dotenv', lambda: None)
    monkeypatch.setenv('DATABASE_URL', 'postgresql://user:pw@db/bloodconnect')
    monkeypatch.setenv('JWT_SECRET_KEY', 'from-env')
    monkeypatch.setenv('JWT_EXPIRES_MINUTES', '15')
    monkeypatch.setenv('BCRYPT_ROUNDS', '12')
    monkeypatch.setenv('ALLOW_PLAINTEXT_CREDENTIALS', 'true')
    monkeypatch.setenv('CORS_ORIGINS', 'https://bloodconnect.site, http://localhost:3000,')
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    settings = Settings.from_env()

    assert settings.database_url == 'postgresql://user:pw@db/bloodconnect'
    assert settings.jwt_secret_key == 'from-env'
    assert settings.jwt_expires_minutes == 15
    assert settings.bcrypt_rounds == 12
    assert settings.allow_plaintext_credentials is True
    assert settings.cors_origins == ('https://bloodconnect.site', 'http://localhost:3000')
    assert settings.log_level == 'DEBUG'


def test_settings_defaults_keep_plaintext_credentials_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'load_dotenv', lambda: None)
    monkeypatch.delenv('ALLOW_PLAINTEXT_CREDENTIALS', raising=False)
    monkeypatch.delenv('BCRYPT_ROUNDS', raising=False)

    settings = Settings.from_env()

    assert settings.allow_plaintext_credentials is False
    assert settings.bcrypt_rounds == 10


def test_settings_are_immutable() -> None:
    settings = Settings()

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.jwt_secret_key = 'mutated'


def test_validate_runtime_config_rejects_default_secret_in_production() -> None:
    with pytest.raises(RuntimeError, match='JWT_SECRET_KEY'):
        validate_runtime_config(Settings(app_env='production'))


def test_validate_runtime_config_rejects_out_of_range_rounds() -> None:
    with pytest.raises(RuntimeError, match='BCRYPT_ROUNDS'):
        validate_runtime_config(Settings(bcrypt_rounds=3))


def test_validate_runtime_config_accepts_development_defaults() -> None:
    validate_runtime_config(Settings())
