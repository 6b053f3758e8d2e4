"""Backup and restore endpoints."""

from pathlib import Path

from fastapi import APIRouter, Depends, Query, status

from shopledger.api.dependencies import (
    get_app_settings,
    get_auto_backup_use_case,
    get_backups,
)
from shopledger.application.dto.requests import (
    BackupRequest,
    PruneBackupsRequest,
    RestoreRequest,
)
from shopledger.application.dto.responses import (
    AutoBackupResponse,
    BackupFileResponse,
    BackupResultResponse,
    ErrorResponse,
)
from shopledger.application.use_cases import RunAutoBackupUseCase
from shopledger.config import Settings
from shopledger.infrastructure.backup import BackupManager, list_backups, prune_backups

router = APIRouter(prefix="/api/backups", tags=["backups"])


@router.post(
    "",
    response_model=BackupResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": ErrorResponse}},
)
async def create_backup(
    request: BackupRequest,
    manager: BackupManager = Depends(get_backups),
) -> BackupResultResponse:
    """Snapshot the database to the given file."""
    path = await manager.backup(request.destination)
    return BackupResultResponse(path=str(path), message="Backup created")


@router.post(
    "/restore",
    response_model=BackupResultResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={500: {"model": ErrorResponse}},
)
async def stage_restore(
    request: RestoreRequest,
    manager: BackupManager = Depends(get_backups),
) -> BackupResultResponse:
    """Stage a backup file; it replaces the database on the next start."""
    path = manager.stage_restore(request.source)
    return BackupResultResponse(
        path=str(path), message="Restore staged; restart the application to apply it"
    )


@router.get("", response_model=list[BackupFileResponse])
async def get_backups_list(
    directory: Path | None = Query(default=None),
    settings: Settings = Depends(get_app_settings),
) -> list[BackupFileResponse]:
    """List backup files in a directory, newest name first."""
    backups = list_backups(directory or settings.backup.default_dir)
    return [
        BackupFileResponse(
            name=b.name, path=str(b.path), size=b.size, modified_at=b.modified_at
        )
        for b in backups
    ]


@router.post("/prune", response_model=list[str])
async def prune(request: PruneBackupsRequest) -> list[str]:
    """Delete all but the newest backups; returns removed paths."""
    return [str(p) for p in prune_backups(request.directory, request.keep)]


@router.post("/auto", response_model=AutoBackupResponse)
async def run_auto_backup(
    use_case: RunAutoBackupUseCase = Depends(get_auto_backup_use_case),
) -> AutoBackupResponse:
    """Run the automatic backup if the configured schedule says it is due."""
    result = await use_case.execute()
    return use_case.to_response(result)
