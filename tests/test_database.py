import logging
from contextlib import asynccontextmanager

import pytest

from saved_items.db import database
from saved_items.db.database import PSQLDatabase, ensure_saved_items_table, pg_health_check


class RecordingConnection:
    def __init__(self, fail=False):
        self.fail = fail
        self.statements = []

    async def execute(self, query, *args):
        self.statements.append(" ".join(query.split()))

    async def fetchval(self, query, *args):
        if self.fail:
            raise OSError("could not connect to server")
        return 1


class RecordingPool:
    def __init__(self, conn):
        self.conn = conn

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


def use_pool(monkeypatch, conn):
    async def get_pool():
        return RecordingPool(conn)

    monkeypatch.setattr(PSQLDatabase, "get_pool", get_pool)


@pytest.mark.anyio
async def test_ensure_saved_items_table_creates_table_and_index(monkeypatch):
    conn = RecordingConnection()
    use_pool(monkeypatch, conn)

    await ensure_saved_items_table()

    create_table, create_index = conn.statements
    assert create_table.startswith("CREATE TABLE IF NOT EXISTS saved_items (")
    assert "user_id NUMERIC(20, 0) NOT NULL" in create_table
    assert "PRIMARY KEY (user_id, position)" in create_table
    assert create_index == (
        "CREATE INDEX IF NOT EXISTS idx_saved_items_user_id ON saved_items (user_id);"
    )


@pytest.mark.anyio
async def test_pg_health_check_reports_reachable_database(monkeypatch):
    use_pool(monkeypatch, RecordingConnection())

    assert await pg_health_check() is True


@pytest.mark.anyio
async def test_pg_health_check_returns_false_on_failure(monkeypatch, caplog):
    use_pool(monkeypatch, RecordingConnection(fail=True))

    with caplog.at_level(logging.ERROR):
        assert await pg_health_check() is False

    assert "could not connect to server" in caplog.records[-1].getMessage()


@pytest.mark.anyio
async def test_close_pool_is_idempotent(monkeypatch):
    closed = []

    class Pool:
        async def close(self):
            closed.append(True)

    monkeypatch.setattr(PSQLDatabase, "pool", Pool())

    await PSQLDatabase.close_pool()
    await PSQLDatabase.close_pool()

    assert closed == [True]
    assert database.PSQLDatabase.pool is None
