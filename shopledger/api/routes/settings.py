"""Settings endpoints: free-form preferences and the backup configuration."""

from fastapi import APIRouter, Depends

from shopledger.api.dependencies import get_settings_kv
from shopledger.application.dto.requests import BackupConfigRequest
from shopledger.application.dto.responses import BackupConfigResponse
from shopledger.core.entities.backup import BackupConfig
from shopledger.infrastructure.storage.sqlite import SQLiteSettingsStore

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _config_response(config: BackupConfig) -> BackupConfigResponse:
    return BackupConfigResponse(
        auto_backup_enabled=config.auto_backup_enabled,
        backup_dir=str(config.backup_dir) if config.backup_dir else None,
        backup_schedule=config.backup_schedule.value,
        keep_backup_count=config.keep_backup_count,
        last_auto_backup_date=config.last_auto_backup_date,
    )


@router.get("", response_model=dict[str, str])
async def get_all_settings(
    store: SQLiteSettingsStore = Depends(get_settings_kv),
) -> dict[str, str]:
    """Get every stored setting."""
    return await store.get_all()


@router.put("", response_model=dict[str, str])
async def update_settings(
    values: dict[str, str],
    store: SQLiteSettingsStore = Depends(get_settings_kv),
) -> dict[str, str]:
    """Upsert settings and return the full set."""
    await store.update(values)
    return await store.get_all()


@router.get("/backup", response_model=BackupConfigResponse)
async def get_backup_config(
    store: SQLiteSettingsStore = Depends(get_settings_kv),
) -> BackupConfigResponse:
    """Get the automatic backup configuration."""
    return _config_response(await store.get_backup_config())


@router.put("/backup", response_model=BackupConfigResponse)
async def update_backup_config(
    request: BackupConfigRequest,
    store: SQLiteSettingsStore = Depends(get_settings_kv),
) -> BackupConfigResponse:
    """Update the automatic backup configuration."""
    current = await store.get_backup_config()
    config = current.model_copy(update=request.model_dump())
    await store.save_backup_config(config)
    return _config_response(config)
