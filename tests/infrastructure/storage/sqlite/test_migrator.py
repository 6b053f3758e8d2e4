"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite
import pytest

from shopledger.infrastructure.storage.sqlite.migrations import (
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)
from shopledger.infrastructure.storage.sqlite.migrations.migrator import REQUIRED_TABLES


class TestMigrationFiles:
    def test_discovers_initial_schema(self):
        migrations = discover_migrations()
        assert migrations
        assert migrations[0].version == "001"
        assert migrations[0].name == "initial_schema"
        assert len(migrations[0].checksum) == 16

    def test_rejects_bad_filename(self, tmp_path: Path):
        path = tmp_path / "initial.sql"
        path.write_text("SELECT 1;")
        with pytest.raises(ValueError):
            MigrationInfo.from_file(path)

    def test_skips_misnamed_files(self, tmp_path: Path):
        (tmp_path / "v001_ok.sql").write_text("SELECT 1;")
        (tmp_path / "v2_short.sql").write_text("SELECT 1;")
        assert [m.name for m in discover_migrations(tmp_path)] == ["ok"]

    def test_required_tables_cover_ledger(self):
        for table in ("products", "purchases", "purchase_items", "orders", "order_items"):
            assert table in REQUIRED_TABLES


class TestInitializeDatabase:
    async def test_creates_schema(self, db_path: Path):
        results = await initialize_database(db_path)

        assert results
        assert all(r.success for r in results)
        checks = await verify_schema_integrity(db_path)
        assert {c.check: c.passed for c in checks} == {
            "foreign_keys": True,
            "integrity": True,
            "required_tables": True,
        }

    async def test_records_applied_version(self, db_path: Path):
        await initialize_database(db_path)

        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute(
                "SELECT version, checksum, execution_time_ms FROM schema_migrations"
            )
            rows = await cursor.fetchall()

        migration = discover_migrations()[0]
        assert rows[0][0] == migration.version
        assert rows[0][1] == migration.checksum
        assert rows[0][2] is not None

    async def test_second_run_is_noop(self, db_path: Path):
        await initialize_database(db_path)
        assert await initialize_database(db_path) == []

    async def test_missing_tables_reported(self, db_path: Path):
        await initialize_database(db_path)
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("DROP TABLE expenses")
            await conn.commit()

        checks = {c.check: c for c in await verify_schema_integrity(db_path)}

        assert checks["required_tables"].passed is False
        assert checks["required_tables"].detail == "expenses"


class TestMigrationStatus:
    async def test_before_and_after(self, db_path: Path):
        status = await get_migration_status(db_path)
        assert status.exists is False
        assert status.current_version is None
        assert status.pending

        await initialize_database(db_path)

        status = await get_migration_status(db_path)
        assert status.up_to_date
        assert status.current_version == discover_migrations()[-1].version
