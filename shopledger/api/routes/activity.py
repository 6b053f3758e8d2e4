"""Activity log endpoints."""

from fastapi import APIRouter, Depends, status

from shopledger.api.dependencies import get_activity_log
from shopledger.application.dto.requests import ActivityLogRequest
from shopledger.application.dto.responses import ActivityLogResponse
from shopledger.core.entities.account import ActivityLog
from shopledger.infrastructure.storage.sqlite import SQLiteActivityLogStore

router = APIRouter(prefix="/api/activity", tags=["activity"])


def _to_response(entry: ActivityLog) -> ActivityLogResponse:
    return ActivityLogResponse(
        id=entry.id,  # type: ignore[arg-type]
        user_id=entry.user_id,
        username=entry.username,
        action=entry.action,
        entity_type=entry.entity_type,
        entity_id=entry.entity_id,
        description=entry.description,
        created_at=entry.created_at,
    )


@router.post("", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED)
async def log_activity(
    request: ActivityLogRequest,
    store: SQLiteActivityLogStore = Depends(get_activity_log),
) -> ActivityLogResponse:
    """Append an activity entry."""
    entry = await store.log(ActivityLog(**request.model_dump()))
    return _to_response(entry)


@router.get("", response_model=list[ActivityLogResponse])
async def list_activity(
    limit: int = 100,
    offset: int = 0,
    store: SQLiteActivityLogStore = Depends(get_activity_log),
) -> list[ActivityLogResponse]:
    """List activity entries, newest first."""
    return [_to_response(e) for e in await store.list_logs(limit=limit, offset=offset)]
