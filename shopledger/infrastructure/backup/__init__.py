"""Database backup infrastructure."""

from shopledger.infrastructure.backup.backup_manager import (
    BackupManager,
    apply_pending_restore,
    list_backups,
    prune_backups,
    stage_restore,
)

_backup_manager: BackupManager | None = None


async def get_backup_manager() -> BackupManager:
    """Get singleton backup manager bound to the process-wide database."""
    global _backup_manager
    if _backup_manager is None:
        from shopledger.infrastructure.storage.sqlite import get_database

        _backup_manager = BackupManager(await get_database())
    return _backup_manager


def reset_backup_manager() -> None:
    """Drop the backup manager singleton."""
    global _backup_manager
    _backup_manager = None


__all__ = [
    "BackupManager",
    "apply_pending_restore",
    "list_backups",
    "prune_backups",
    "stage_restore",
    "get_backup_manager",
    "reset_backup_manager",
]
