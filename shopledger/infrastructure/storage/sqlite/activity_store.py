"""SQLite activity log store."""

from datetime import datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.account import ActivityLog
from shopledger.core.interfaces.storage import IActivityLogStore
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)


class SQLiteActivityLogStore(IActivityLogStore):
    """Append-only audit trail in SQLite."""

    def __init__(self, db: Database):
        self._db = db

    async def log(self, entry: ActivityLog) -> ActivityLog:
        """Append an activity entry."""
        async with self._db.transaction("log_activity") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO activity_logs (
                    user_id, username, action, entity_type, entity_id, description
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.user_id,
                    entry.username,
                    entry.action,
                    entry.entity_type,
                    entry.entity_id,
                    entry.description,
                ),
            )
            entry.id = cursor.lastrowid

        logger.debug(
            "activity_logged",
            action=entry.action,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
        )
        return entry

    async def list_logs(self, limit: int = 100, offset: int = 0) -> list[ActivityLog]:
        """List entries, newest first."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM activity_logs
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> ActivityLog:
        return ActivityLog(
            id=row["id"],
            user_id=row["user_id"],
            username=row["username"],
            action=row["action"],
            entity_type=row["entity_type"],
            entity_id=row["entity_id"],
            description=row["description"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
