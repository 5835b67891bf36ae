import os
import pytest

# Store original environment variables to restore after tests
_original_env = {}
_TEST_VARS = ['POSTGRES_USER', 'POSTGRES_PASSWORD', 'POSTGRES_HOST', 'POSTGRES_PORT', 'POSTGRES_DB']


def _setup_test_env():
    """Set up environment variables needed for database configuration during tests"""
    for var in _TEST_VARS:
        if var in os.environ:
            _original_env[var] = os.environ[var]

    if not os.getenv("DATABASE_URL"):
        os.environ.setdefault("POSTGRES_USER", "testuser")
        os.environ.setdefault("POSTGRES_PASSWORD", "testpass")
        os.environ.setdefault("POSTGRES_HOST", "localhost")
        os.environ.setdefault("POSTGRES_PORT", "5432")
        os.environ.setdefault("POSTGRES_DB", "testdb")
    os.environ.setdefault("PYTEST_RUNNING", "1")


def _restore_env():
    """Restore original environment variables after tests"""
    for var in _TEST_VARS:
        if var not in _original_env and var in os.environ:
            del os.environ[var]
    for var, value in _original_env.items():
        os.environ[var] = value
    _original_env.clear()


_setup_test_env()

from fastapi.testclient import TestClient

from collab.db.database import SessionLocal, engine, get_db
from collab.db.models import Base
from collab.api.main import app


@pytest.fixture(scope="session", autouse=True)
def _restore_test_env():
    """Restore original environment variables after all tests complete"""
    yield
    _restore_env()


@pytest.fixture(autouse=True)
def _identity_env(monkeypatch):
    # Header identity unless a test opts into dev mode explicitly
    monkeypatch.delenv("DEV_MODE", raising=False)
    monkeypatch.delenv("ADMIN_USERNAMES", raising=False)
    monkeypatch.setenv("APP_BASE_URL", "http://localhost:3000")
    yield


# Fallback for threadpool contexts where the fixture session must be shared
_GLOBAL_SESSION = None


# Fresh schema per test on the in-memory engine
@pytest.fixture(autouse=True)
def db_session():
    global _GLOBAL_SESSION
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    _GLOBAL_SESSION = session
    try:
        yield session
    finally:
        _GLOBAL_SESSION = None
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


def _override_get_db():
    if _GLOBAL_SESSION is not None:
        yield _GLOBAL_SESSION
        return
    # Last resort: ad-hoc session
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _headers(username: str, email: str = None):
        headers = {"x-auth-request-user": username}
        if email:
            headers["x-auth-request-email"] = email
        return headers
    return _headers
