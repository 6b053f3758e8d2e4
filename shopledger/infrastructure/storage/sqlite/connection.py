"""
Async SQLite database handle with aiosqlite.

One shared connection per process, serialized by a single lock. Every store
receives the handle explicitly and runs its statements inside
``connection()`` (reads) or ``transaction()`` (writes).
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from shopledger.config import get_logger, get_settings
from shopledger.core.exceptions import DuplicateRecordError, PersistenceError

logger = get_logger(__name__)


def to_db_datetime(value: datetime) -> str:
    """
    Format a timestamp the way ledger date columns store it.

    Columns hold naive local time; report windows compare calendar dates
    with SQLite's date(), which would shift offset-carrying values to UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.isoformat(sep=" ", timespec="seconds")


class Database:
    """
    Serialized access to one SQLite connection.

    At most one operation holds the connection at a time, so read-modify-write
    sequences such as average-cost updates never interleave.
    """

    def __init__(
        self,
        db_path: Path,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.busy_timeout = busy_timeout

        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        """Open the shared connection."""
        async with self._lock:
            if self._conn is not None:
                return

            # Ensure database directory exists
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self._conn = await self._create_connection()
            logger.info("database_opened", db_path=str(self.db_path))

    async def _create_connection(self) -> aiosqlite.Connection:
        """Create the connection with explicit transaction control."""
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)

        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        await conn.execute("PRAGMA foreign_keys=ON")

        # Row factory for dict-like access
        conn.row_factory = aiosqlite.Row

        return conn

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Hold the connection for read-only work.

        Usage:
            async with db.connection() as conn:
                cursor = await conn.execute(...)
        """
        if self._conn is None:
            await self.open()

        async with self._lock:
            try:
                yield self._conn  # type: ignore[misc]
            except aiosqlite.Error as e:
                logger.error("database_read_failed", error=str(e))
                raise PersistenceError("read", str(e)) from e

    @asynccontextmanager
    async def transaction(
        self, operation: str = "transaction"
    ) -> AsyncIterator[aiosqlite.Connection]:
        """
        Hold the connection inside BEGIN IMMEDIATE ... COMMIT.

        Any exception, including cancellation, rolls back every statement
        issued inside the block. SQLite errors surface as PersistenceError.
        """
        if self._conn is None:
            await self.open()

        async with self._lock:
            conn = self._conn
            assert conn is not None
            try:
                await conn.execute("BEGIN IMMEDIATE")
            except aiosqlite.Error as e:
                raise PersistenceError(operation, str(e)) from e

            try:
                yield conn
                await conn.commit()
            except aiosqlite.IntegrityError as e:
                await self._rollback(conn, operation)
                if "UNIQUE" in str(e):
                    raise DuplicateRecordError(operation, str(e)) from e
                raise PersistenceError(operation, str(e)) from e
            except aiosqlite.Error as e:
                await self._rollback(conn, operation)
                raise PersistenceError(operation, str(e)) from e
            except BaseException:
                await self._rollback(conn, operation)
                raise

    async def _rollback(self, conn: aiosqlite.Connection, operation: str) -> None:
        await conn.rollback()
        logger.warning("transaction_rolled_back", operation=operation)

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[aiosqlite.Connection]:
        """Hold the lock without a transaction, for VACUUM INTO and the like."""
        if self._conn is None:
            await self.open()

        async with self._lock:
            yield self._conn  # type: ignore[misc]

    async def close(self) -> None:
        """Close the shared connection."""
        async with self._lock:
            if self._conn is not None:
                await self._conn.close()
                self._conn = None
                logger.info("database_closed", db_path=str(self.db_path))


# Process-wide handle used by the application wiring
_database: Database | None = None


async def get_database() -> Database:
    """Get or open the process-wide database handle."""
    global _database
    if _database is None:
        settings = get_settings()
        _database = Database(
            db_path=settings.storage.db_path,
            busy_timeout=settings.storage.busy_timeout,
        )
        await _database.open()
    return _database


async def close_database() -> None:
    """Close the process-wide database handle."""
    global _database
    if _database is not None:
        await _database.close()
        _database = None
