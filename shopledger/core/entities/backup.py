"""Backup configuration and backup file entities."""

from datetime import date, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BackupSchedule(str, Enum):
    """How often automatic backups run."""

    DAILY = "daily"
    WEEKLY = "weekly"


class BackupConfig(BaseModel):
    """Typed view over the persisted backup settings."""

    auto_backup_enabled: bool = False
    backup_dir: Path | None = None
    backup_schedule: BackupSchedule = BackupSchedule.DAILY
    keep_backup_count: int = Field(default=5, ge=1)
    last_auto_backup_date: date | None = None

    def is_due(self, today: date) -> bool:
        """Whether an automatic backup should run on the given day."""
        if not self.auto_backup_enabled or self.backup_dir is None:
            return False
        if self.last_auto_backup_date is None:
            return True
        if self.backup_schedule == BackupSchedule.WEEKLY:
            return (today - self.last_auto_backup_date).days >= 7
        return self.last_auto_backup_date != today


class BackupInfo(BaseModel):
    """A backup file on disk."""

    name: str
    path: Path
    size: int
    modified_at: datetime
