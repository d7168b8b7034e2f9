from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core.config import get_settings


def build_connect_args(database_url: str, timeout_seconds: int) -> dict:
    """Driver options that bound every round trip to ``timeout_seconds``."""
    backend_name = make_url(database_url).get_backend_name()

    if backend_name == "postgresql":
        return {
            "connect_timeout": timeout_seconds,
            "options": f"-c statement_timeout={timeout_seconds * 1000}",
        }
    if backend_name == "mysql":
        return {
            "connect_timeout": timeout_seconds,
            "read_timeout": timeout_seconds,
            "write_timeout": timeout_seconds,
        }
    if backend_name == "sqlite":
        return {"timeout": timeout_seconds, "check_same_thread": False}
    return {}


settings = get_settings()

engine = create_engine(
    settings.database_url,
    connect_args=build_connect_args(settings.database_url, settings.database_timeout_seconds),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
