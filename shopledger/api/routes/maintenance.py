"""Maintenance endpoints."""

from fastapi import APIRouter, Depends

from shopledger.api.dependencies import get_maintenance
from shopledger.application.dto.requests import CleanupRequest
from shopledger.application.dto.responses import CleanupResponse
from shopledger.infrastructure.storage.sqlite import SQLiteMaintenanceStore

router = APIRouter(prefix="/api/maintenance", tags=["maintenance"])


@router.post("/cleanup", response_model=CleanupResponse)
async def cleanup_database(
    request: CleanupRequest,
    store: SQLiteMaintenanceStore = Depends(get_maintenance),
) -> CleanupResponse:
    """Wipe the selected data in one transaction."""
    removed = await store.cleanup(**request.model_dump())
    return CleanupResponse(removed=removed)
