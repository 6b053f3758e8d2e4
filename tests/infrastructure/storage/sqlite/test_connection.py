"""Tests for the shared SQLite connection."""

from pathlib import Path

import pytest

from shopledger.core.exceptions import DuplicateRecordError, PersistenceError
from shopledger.infrastructure.storage.sqlite import Database, to_db_datetime
from shopledger.infrastructure.storage.sqlite import connection as conn_module


class TestDatabase:
    async def test_open_creates_parent_directory(self, tmp_path: Path):
        db = Database(tmp_path / "nested" / "dir" / "app.db")
        await db.open()
        try:
            assert db.is_open
            assert (tmp_path / "nested" / "dir").is_dir()
        finally:
            await db.close()
        assert not db.is_open

    async def test_pragmas(self, db: Database):
        async with db.connection() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0] == "wal"

    async def test_transaction_commits(self, db: Database):
        async with db.transaction("write") as conn:
            await conn.execute("INSERT INTO settings (key, value) VALUES ('a', '1')")

        async with db.connection() as conn:
            cursor = await conn.execute("SELECT value FROM settings WHERE key = 'a'")
            assert (await cursor.fetchone())["value"] == "1"

    async def test_transaction_rolls_back_on_error(self, db: Database):
        with pytest.raises(RuntimeError):
            async with db.transaction("write") as conn:
                await conn.execute("INSERT INTO settings (key, value) VALUES ('a', '1')")
                raise RuntimeError("boom")

        async with db.connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM settings")
            assert (await cursor.fetchone())[0] == 0

    async def test_sqlite_error_becomes_persistence_error(self, db: Database):
        with pytest.raises(PersistenceError) as exc_info:
            async with db.transaction("bad_sql") as conn:
                await conn.execute("INSERT INTO settings (key, value) VALUES ('a', '1')")
                await conn.execute("INSERT INTO no_such_table VALUES (1)")

        assert exc_info.value.details["operation"] == "bad_sql"
        async with db.connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM settings")
            assert (await cursor.fetchone())[0] == 0

    async def test_unique_violation_becomes_duplicate_error(self, db: Database):
        async with db.transaction() as conn:
            await conn.execute("INSERT INTO settings (key, value) VALUES ('a', '1')")

        with pytest.raises(DuplicateRecordError):
            async with db.transaction("dup") as conn:
                await conn.execute("INSERT INTO settings (key, value) VALUES ('a', '2')")

    async def test_connection_usable_after_rollback(self, db: Database):
        with pytest.raises(ValueError):
            async with db.transaction():
                raise ValueError("x")

        async with db.transaction() as conn:
            await conn.execute("INSERT INTO settings (key, value) VALUES ('b', '2')")


class TestProcessDatabase:
    async def test_get_database_is_singleton(self, monkeypatch):
        monkeypatch.setattr(conn_module, "_database", None)
        try:
            first = await conn_module.get_database()
            second = await conn_module.get_database()
            assert first is second
            assert first.is_open
        finally:
            await conn_module.close_database()
        assert conn_module._database is None


def test_to_db_datetime():
    from datetime import datetime

    assert to_db_datetime(datetime(2024, 3, 5, 14, 7, 9, 123456)) == "2024-03-05 14:07:09"
