"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI `get_db` dependency.
"""
import os
import sys
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, generate from individual components (all must be set)
    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    required = {
        "POSTGRES_USER": db_user,
        "POSTGRES_PASSWORD": db_password,
        "POSTGRES_HOST": db_host,
        "POSTGRES_PORT": db_port,
        "POSTGRES_DB": db_name,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running, so
    module import during collection is detected through ``sys.modules``.
    ``PYTEST_RUNNING=1`` forces the test path explicitly.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _resolve_engine_config():
    """Return (url, engine kwargs) honoring the test override order.

    1. COLLAB_TEST_DB when set.
    2. TEST_DATABASE_URL (e2e runs against a real Postgres).
    3. Under pytest: in-memory SQLite shared through a StaticPool.
    4. Otherwise the production URL.
    """
    explicit_test_db = os.getenv("COLLAB_TEST_DB")
    explicit_e2e_db = os.getenv("TEST_DATABASE_URL")

    if explicit_test_db:
        kwargs = {"connect_args": {"check_same_thread": False}} if explicit_test_db.startswith("sqlite") else {}
        return explicit_test_db, kwargs
    if explicit_e2e_db:
        return explicit_e2e_db, {}
    if _is_pytest_runtime():
        # In-memory SQLite with StaticPool so the schema persists across connections
        return "sqlite+pysqlite:///:memory:", {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    url = _get_database_url()
    kwargs = {"connect_args": {"check_same_thread": False}} if url.startswith("sqlite") else {}
    return url, kwargs


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless foreign keys are switched on per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


DATABASE_URL, _engine_kwargs = _resolve_engine_config()

engine = create_engine(DATABASE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
