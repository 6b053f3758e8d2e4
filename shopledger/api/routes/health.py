"""
Health check endpoints.
"""

import time

import aiosqlite
from fastapi import APIRouter

from shopledger import __version__
from shopledger.application.dto.responses import HealthResponse
from shopledger.core.exceptions import PersistenceError

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Runs a trivial query through the shared connection and reports latency.
    """
    from shopledger.infrastructure.storage.sqlite import get_database

    db = await get_database()
    database: dict[str, object] = {"path": str(db.db_path), "available": False}

    try:
        start = time.time()
        async with db.connection() as conn:
            await conn.execute("SELECT 1")
        database["available"] = True
        database["latency_ms"] = round((time.time() - start) * 1000, 2)
    except (PersistenceError, aiosqlite.Error) as e:
        database["error"] = str(e)

    return HealthResponse(
        status="healthy" if database["available"] else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )
