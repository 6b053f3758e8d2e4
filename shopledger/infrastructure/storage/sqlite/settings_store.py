"""
SQLite key/value settings store.

The backup settings live in the same table as plain strings; this store is
the only place that converts them to and from ``BackupConfig``.
"""

from datetime import date
from pathlib import Path

from shopledger.config import get_logger
from shopledger.core.entities.backup import BackupConfig, BackupSchedule
from shopledger.core.interfaces.storage import ISettingsStore
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)

KEY_AUTO_BACKUP = "auto_backup"
KEY_BACKUP_DIR = "backup_dir"
KEY_BACKUP_SCHEDULE = "backup_schedule"
KEY_KEEP_BACKUPS = "keep_backups"
KEY_LAST_AUTO_BACKUP = "last_auto_backup_date"

DEFAULT_KEEP_BACKUPS = 5


class SQLiteSettingsStore(ISettingsStore):
    """SQLite implementation of the settings table."""

    def __init__(self, db: Database):
        self._db = db

    async def get_all(self) -> dict[str, str]:
        """Get every stored setting."""
        async with self._db.connection() as conn:
            cursor = await conn.execute("SELECT key, value FROM settings ORDER BY key")
            rows = await cursor.fetchall()
            return {row["key"]: row["value"] for row in rows}

    async def update(self, values: dict[str, str]) -> None:
        """Upsert settings."""
        if not values:
            return

        async with self._db.transaction("update_settings") as conn:
            await conn.executemany(
                """
                INSERT INTO settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                list(values.items()),
            )

        logger.info("settings_updated", keys=sorted(values))

    async def get_backup_config(self) -> BackupConfig:
        """Resolve the backup settings into a BackupConfig."""
        values = await self.get_all()
        return self.to_backup_config(values)

    async def save_backup_config(self, config: BackupConfig) -> BackupConfig:
        """Persist a BackupConfig."""
        await self.update(self.from_backup_config(config))
        return config

    async def mark_auto_backup(self, day: date) -> None:
        """Record the day of the latest automatic backup."""
        await self.update({KEY_LAST_AUTO_BACKUP: day.isoformat()})

    @staticmethod
    def to_backup_config(values: dict[str, str]) -> BackupConfig:
        """Build a BackupConfig from raw settings, ignoring unparsable values."""
        backup_dir = values.get(KEY_BACKUP_DIR, "").strip()

        try:
            schedule = BackupSchedule(values.get(KEY_BACKUP_SCHEDULE, "daily"))
        except ValueError:
            schedule = BackupSchedule.DAILY

        try:
            keep = int(values.get(KEY_KEEP_BACKUPS, DEFAULT_KEEP_BACKUPS))
        except ValueError:
            keep = DEFAULT_KEEP_BACKUPS

        last_day: date | None = None
        raw_last = values.get(KEY_LAST_AUTO_BACKUP)
        if raw_last:
            try:
                last_day = date.fromisoformat(raw_last[:10])
            except ValueError:
                logger.warning("invalid_last_backup_date", value=raw_last)

        return BackupConfig(
            auto_backup_enabled=values.get(KEY_AUTO_BACKUP) == "true",
            backup_dir=Path(backup_dir) if backup_dir else None,
            backup_schedule=schedule,
            keep_backup_count=max(keep, 1),
            last_auto_backup_date=last_day,
        )

    @staticmethod
    def from_backup_config(config: BackupConfig) -> dict[str, str]:
        """Flatten a BackupConfig into settings rows."""
        values = {
            KEY_AUTO_BACKUP: "true" if config.auto_backup_enabled else "false",
            KEY_BACKUP_DIR: str(config.backup_dir) if config.backup_dir else "",
            KEY_BACKUP_SCHEDULE: config.backup_schedule.value,
            KEY_KEEP_BACKUPS: str(config.keep_backup_count),
        }
        if config.last_auto_backup_date is not None:
            values[KEY_LAST_AUTO_BACKUP] = config.last_auto_backup_date.isoformat()
        return values
