from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from tests.e2e.utils_pg import postgres_container

EXPECTED_TABLES = {"users", "projects", "teamspaces", "teamspace_members", "tasks", "chats", "audit_logs"}


def _alembic_config() -> Config:
    root = Path(__file__).resolve().parents[2]
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("script_location", str(root / "migrations"))
    return cfg


@pytest.mark.e2e
def test_upgrade_creates_schema_and_downgrade_removes_it(monkeypatch):
    with postgres_container() as database_url:
        monkeypatch.setenv("TEST_DATABASE_URL", database_url)
        cfg = _alembic_config()

        command.upgrade(cfg, "head")
        engine = create_engine(database_url)
        try:
            inspector = inspect(engine)
            assert EXPECTED_TABLES <= set(inspector.get_table_names())
            chat_columns = {c["name"] for c in inspector.get_columns("chats")}
            assert {"id", "message", "timestamp", "teamspace_id", "user_id"} <= chat_columns
            index_names = {i["name"] for i in inspector.get_indexes("chats")}
            assert "idx_chats_teamspace_id_timestamp" in index_names

            command.downgrade(cfg, "base")
            remaining = set(inspect(engine).get_table_names())
            assert not (EXPECTED_TABLES & remaining)

            # Round trip once more to catch leftovers from the downgrade
            command.upgrade(cfg, "head")
        finally:
            engine.dispose()
