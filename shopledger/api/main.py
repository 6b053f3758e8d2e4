"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopledger import __version__
from shopledger.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from shopledger.api.middleware.error_handler import setup_exception_handlers
from shopledger.api.routes import (
    activity_router,
    backups_router,
    expenses_router,
    health_router,
    maintenance_router,
    orders_router,
    products_router,
    purchases_router,
    reports_router,
    settings_router,
    users_router,
)
from shopledger.config import configure_logging, get_logger, get_settings
from shopledger.core.exceptions import BackupError, PersistenceError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Applies a staged restore, migrates and opens the database, then runs a
    due automatic backup. Closes the database on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
    )

    from shopledger.infrastructure.backup import apply_pending_restore
    from shopledger.infrastructure.storage.sqlite import get_database
    from shopledger.infrastructure.storage.sqlite.migrations import run_migrations

    try:
        if apply_pending_restore(settings.storage.db_path, settings.storage.restore_path):
            logger.info("staged_restore_applied")

        results = await run_migrations(settings.storage.db_path)
        failed = next((r for r in results if not r.success), None)
        if failed is not None:
            raise PersistenceError(f"migration {failed.version}", failed.error or "unknown")
        logger.info("database_initialized", migrations_applied=len(results))

        await get_database()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    if settings.backup.auto_backup_on_start:
        from shopledger.application.use_cases import RunAutoBackupUseCase

        try:
            result = await RunAutoBackupUseCase().execute()
            logger.info("startup_auto_backup", performed=result.performed, reason=result.reason)
        except BackupError as e:
            # Start-up continues without the backup
            logger.warning("startup_auto_backup_failed", error=e.message)

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    from shopledger.infrastructure.backup import reset_backup_manager
    from shopledger.infrastructure.storage.sqlite import close_database, reset_stores

    await close_database()
    reset_stores()
    reset_backup_manager()

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Point-of-sale backend: catalog, purchases, sales and reports",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(purchases_router)
    app.include_router(orders_router)
    app.include_router(reports_router)
    app.include_router(settings_router)
    app.include_router(backups_router)
    app.include_router(users_router)
    app.include_router(activity_router)
    app.include_router(expenses_router)
    app.include_router(maintenance_router)

    # Root health endpoint (for service managers and load balancers)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {"status": "healthy", "version": __version__}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "shopledger.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
