import os
from datetime import date

import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret-key-for-bloodconnect-suite')

from backend.auth.jwt_handler import SessionClaim, create_access_token  # noqa: E402
from backend.core.config import Settings, get_settings  # noqa: E402
from backend.database import Base, get_db  # noqa: E402
from backend.main import app  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret_key='test-secret-key-for-bloodconnect-suite', bcrypt_rounds=4)


@pytest.fixture
def engine():
    test_engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture
def db(engine):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db, settings):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seed_user(db):
    """Insert a row directly, bypassing registration. Hashes unless ``plaintext``."""
    def _seed(model, email: str, password: str, *, name: str = 'Seeded User', plaintext: bool = False):
        stored = password if plaintext else bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()
        row = model(name=name, email=email, password=stored, date_of_birth=date(1990, 1, 1))
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    return _seed


@pytest.fixture
def count_rows(db):
    def _count(model) -> int:
        return db.execute(select(func.count()).select_from(model)).scalar_one()

    return _count


@pytest.fixture
def make_token(settings):
    def _make(role: str, *, user_id: int = 1, name: str = 'Token User', email: str = 'token@example.com') -> str:
        return create_access_token(SessionClaim(id=user_id, name=name, email=email, role=role), settings)

    return _make
