import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_JWT_SECRET_KEY = "change-me"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    database_url: str = "sqlite:///./bloodconnect.db"
    database_timeout_seconds: int = 5

    jwt_secret_key: str = DEFAULT_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60

    bcrypt_rounds: int = 10
    # Staff and admin rows seeded before hashing was introduced still hold
    # plaintext values. Only honored while this flag is on.
    allow_plaintext_credentials: bool = False

    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("http://localhost:3000",))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        defaults = cls()
        return cls(
            app_env=os.getenv("APP_ENV", defaults.app_env),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            database_timeout_seconds=int(
                os.getenv("DATABASE_TIMEOUT_SECONDS", str(defaults.database_timeout_seconds))
            ),
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", defaults.jwt_secret_key),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", defaults.jwt_algorithm),
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", str(defaults.jwt_expires_minutes))),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", str(defaults.bcrypt_rounds))),
            allow_plaintext_credentials=_get_bool(
                os.getenv("ALLOW_PLAINTEXT_CREDENTIALS"),
                default=defaults.allow_plaintext_credentials,
            ),
            cors_origins=_get_list(os.getenv("CORS_ORIGINS"), defaults.cors_origins),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def validate_runtime_config(settings: Settings) -> None:
    if settings.app_env.lower() == "production" and settings.jwt_secret_key == DEFAULT_JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if not 4 <= settings.bcrypt_rounds <= 31:
        raise RuntimeError("BCRYPT_ROUNDS must be between 4 and 31.")
