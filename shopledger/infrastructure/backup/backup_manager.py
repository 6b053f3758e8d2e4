"""
Database backup and restore.

Backups are consistent snapshots produced by ``VACUUM INTO`` while the
shared connection is held. Restores are staged as a file next to the live
database and swapped in on the next start-up, before anything opens it.
"""

import os
import shutil
from datetime import datetime
from pathlib import Path

import aiosqlite

from shopledger.config import get_logger, get_settings
from shopledger.core.entities.backup import BackupInfo
from shopledger.core.exceptions import BackupError
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)

BACKUP_SUFFIXES = (".db", ".bak")


class BackupManager:
    """Creates, lists, prunes and restores database snapshots."""

    def __init__(self, db: Database, restore_path: Path | None = None):
        self._db = db
        self.restore_path = restore_path or get_settings().storage.restore_path

    async def backup(self, destination: Path) -> Path:
        """Write a snapshot of the live database to destination."""
        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists():
                # VACUUM INTO refuses to overwrite
                destination.unlink()
        except OSError as e:
            raise BackupError("backup", str(destination), str(e)) from e

        async with self._db.exclusive() as conn:
            try:
                await conn.execute("VACUUM INTO ?", (str(destination),))
            except aiosqlite.Error as e:
                logger.error("backup_failed", destination=str(destination), error=str(e))
                raise BackupError("backup", str(destination), str(e)) from e

        logger.info(
            "backup_created",
            destination=str(destination),
            size=destination.stat().st_size,
        )
        return destination

    def stage_restore(self, source: Path) -> Path:
        """Stage source into this manager's restore slot."""
        return stage_restore(source, self.restore_path)


def stage_restore(source: Path, restore_path: Path) -> Path:
    """Copy source into the restore slot; it replaces the database on next start."""
    source = Path(source)
    if not source.is_file():
        raise BackupError("restore", str(source), "source file does not exist")

    try:
        restore_path.parent.mkdir(parents=True, exist_ok=True)
        if restore_path.exists():
            restore_path.unlink()
        shutil.copy2(source, restore_path)
    except OSError as e:
        raise BackupError("restore", str(source), str(e)) from e

    logger.info("restore_staged", source=str(source), staged=str(restore_path))
    return restore_path


def apply_pending_restore(db_path: Path, restore_path: Path) -> bool:
    """
    Swap a staged restore file in place of the database.

    Must run before the database is opened. Stale WAL and shared-memory
    files are removed so they are not replayed on top of the restored data.
    Returns True when a restore was applied.
    """
    if not restore_path.exists():
        return False

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        for suffix in ("-wal", "-shm"):
            sidecar = db_path.with_name(db_path.name + suffix)
            if sidecar.exists():
                sidecar.unlink()
        os.replace(restore_path, db_path)
    except OSError as e:
        raise BackupError("apply_restore", str(restore_path), str(e)) from e

    logger.info("database_restored", db_path=str(db_path))
    return True


def list_backups(directory: Path) -> list[BackupInfo]:
    """Backup files in directory, newest name first. Missing directory is empty."""
    directory = Path(directory)
    if not directory.is_dir():
        return []

    backups = []
    for path in directory.iterdir():
        if not path.is_file() or path.suffix not in BACKUP_SUFFIXES:
            continue
        stat = path.stat()
        backups.append(
            BackupInfo(
                name=path.name,
                path=path,
                size=stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime),
            )
        )

    backups.sort(key=lambda b: b.name, reverse=True)
    return backups


def prune_backups(directory: Path, keep: int) -> list[Path]:
    """Delete all but the first ``keep`` backups; returns the removed paths."""
    removed = []
    for info in list_backups(directory)[max(keep, 0):]:
        try:
            info.path.unlink()
        except OSError as e:
            logger.warning("backup_prune_failed", path=str(info.path), error=str(e))
            continue
        removed.append(info.path)

    if removed:
        logger.info("backups_pruned", directory=str(directory), removed=len(removed))
    return removed
