"""
Versioned schema migrations for the ledger database.

Migration files are named ``vNNN_snake_name.sql`` and live beside this
module. Each one runs in its own transaction together with its
``schema_migrations`` row, so a failing script leaves the schema at the
previous version.
"""

import hashlib
import re
import time
from dataclasses import dataclass, field
from pathlib import Path

import aiosqlite

from shopledger.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"^v(?P<version>\d{3})_(?P<name>[a-z0-9_]+)\.sql$")

REQUIRED_TABLES = (
    "products",
    "product_images",
    "purchases",
    "purchase_items",
    "orders",
    "order_items",
    "settings",
    "users",
    "activity_logs",
    "expenses",
    "schema_migrations",
)


@dataclass(frozen=True)
class MigrationInfo:
    """A migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(match["version"], match["name"], path, checksum)

    def script(self) -> str:
        """The migration SQL followed by its bookkeeping row, as one transaction."""
        body = self.path.read_text(encoding="utf-8")
        return (
            "BEGIN;\n"
            f"{body}\n;\n"
            "INSERT OR REPLACE INTO schema_migrations (version, name, checksum) "
            f"VALUES ('{self.version}', '{self.name}', '{self.checksum}');\n"
            "COMMIT;"
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class MigrationStatus:
    """Applied and pending versions of a database file."""

    exists: bool
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)

    @property
    def current_version(self) -> str | None:
        return self.applied[-1] if self.applied else None

    @property
    def up_to_date(self) -> bool:
        return self.exists and not self.pending


@dataclass
class IntegrityCheck:
    """One schema health check."""

    check: str
    passed: bool
    detail: str = ""


def discover_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration scripts in version order; misnamed files are skipped."""
    migrations = []
    for path in sorted(migrations_dir.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    cursor = await conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
    )
    if await cursor.fetchone() is None:
        return {}
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations ORDER BY version")
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    start = time.perf_counter()
    try:
        await conn.executescript(migration.script())
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            migration.version,
            migration.name,
            success=False,
            execution_time_ms=int((time.perf_counter() - start) * 1000),
            error=str(e),
        )

    elapsed = int((time.perf_counter() - start) * 1000)
    await conn.execute(
        "UPDATE schema_migrations SET execution_time_ms = ? WHERE version = ?",
        (elapsed, migration.version),
    )
    await conn.commit()
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed,
    )
    return MigrationResult(migration.version, migration.name, True, elapsed)


async def initialize_database(db_path: Path | None = None) -> list[MigrationResult]:
    """
    Bring a database file up to the latest schema version.

    Creates the file when missing. Stops at the first failing migration.

    Returns:
        Results of the migrations attempted in this call (empty when current)
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        applied = await _applied_checksums(conn)
        for migration in discover_migrations():
            known = applied.get(migration.version)
            if known is not None:
                if known != migration.checksum:
                    logger.warning("migration_checksum_changed", version=migration.version)
                continue

            result = await _apply(conn, migration)
            results.append(result)
            if not result.success:
                break

    if results:
        logger.info(
            "database_migrated",
            db_path=str(db_path),
            applied=[r.version for r in results if r.success],
        )
    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> MigrationStatus:
    """Which migrations a database file has and still needs."""
    db_path = db_path or get_settings().storage.db_path
    versions = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return MigrationStatus(exists=False, pending=versions)

    async with aiosqlite.connect(db_path) as conn:
        applied = await _applied_checksums(conn)

    return MigrationStatus(
        exists=True,
        applied=sorted(applied),
        pending=[v for v in versions if v not in applied],
    )


async def verify_schema_integrity(db_path: Path | None = None) -> list[IntegrityCheck]:
    """Run foreign key, page integrity and required table checks."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = await cursor.fetchall()

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]
    return [
        IntegrityCheck("foreign_keys", not violations, f"{len(violations)} violations"),
        IntegrityCheck("integrity", integrity == "ok", integrity),
        IntegrityCheck("required_tables", not missing, ", ".join(missing)),
    ]
