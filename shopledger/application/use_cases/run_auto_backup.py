"""Run Auto Backup Use Case: scheduled snapshot with retention."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from shopledger.application.dto.responses import AutoBackupResponse
from shopledger.config import get_logger, get_settings
from shopledger.core.interfaces.storage import ISettingsStore
from shopledger.infrastructure.backup import BackupManager, prune_backups

logger = get_logger(__name__)


@dataclass
class AutoBackupResult:
    """Result of an automatic backup check."""

    performed: bool
    reason: str
    path: Path | None = None
    pruned: int = 0


class RunAutoBackupUseCase:
    """
    Back up the database when the configured schedule says one is due.

    Flow:
    1. Resolve the backup config from settings
    2. Skip unless enabled, a directory is set and the schedule is due
    3. Snapshot to ``<prefix>-%Y-%m-%d-%H-%M-%S.db``
    4. Prune to the configured retention
    5. Record today's date as the last automatic backup
    """

    def __init__(
        self,
        settings_store: ISettingsStore | None = None,
        backup_manager: BackupManager | None = None,
        file_prefix: str | None = None,
    ):
        self._settings_store = settings_store
        self._backup_manager = backup_manager
        self.file_prefix = file_prefix or get_settings().backup.file_prefix

    async def _get_settings_store(self) -> ISettingsStore:
        if self._settings_store is None:
            from shopledger.infrastructure.storage.sqlite import get_settings_store

            self._settings_store = await get_settings_store()
        return self._settings_store

    async def _get_backup_manager(self) -> BackupManager:
        if self._backup_manager is None:
            from shopledger.infrastructure.backup import get_backup_manager

            self._backup_manager = await get_backup_manager()
        return self._backup_manager

    async def execute(self, now: datetime | None = None) -> AutoBackupResult:
        """Execute auto backup use case."""
        now = now or datetime.now()
        settings_store = await self._get_settings_store()
        config = await settings_store.get_backup_config()

        if not config.auto_backup_enabled:
            return AutoBackupResult(performed=False, reason="disabled")
        if config.backup_dir is None:
            return AutoBackupResult(performed=False, reason="no_backup_dir")
        if not config.is_due(now.date()):
            logger.debug(
                "auto_backup_not_due",
                schedule=config.backup_schedule.value,
                last=str(config.last_auto_backup_date),
            )
            return AutoBackupResult(performed=False, reason="not_due")

        logger.info("auto_backup_started", backup_dir=str(config.backup_dir))

        destination = config.backup_dir / (
            f"{self.file_prefix}-{now.strftime('%Y-%m-%d-%H-%M-%S')}.db"
        )
        manager = await self._get_backup_manager()
        path = await manager.backup(destination)
        removed = prune_backups(config.backup_dir, config.keep_backup_count)
        await settings_store.mark_auto_backup(now.date())

        logger.info("auto_backup_complete", path=str(path), pruned=len(removed))
        return AutoBackupResult(
            performed=True, reason="created", path=path, pruned=len(removed)
        )

    def to_response(self, result: AutoBackupResult) -> AutoBackupResponse:
        """Convert result to API response."""
        return AutoBackupResponse(
            performed=result.performed,
            reason=result.reason,
            path=str(result.path) if result.path else None,
            pruned=result.pruned,
        )
