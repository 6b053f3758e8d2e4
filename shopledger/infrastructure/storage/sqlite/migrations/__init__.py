"""Database migrations module."""

from shopledger.infrastructure.storage.sqlite.migrations.migrator import (
    IntegrityCheck,
    MigrationInfo,
    MigrationResult,
    MigrationStatus,
    discover_migrations,
    get_migration_status,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "IntegrityCheck",
    "MigrationInfo",
    "MigrationResult",
    "MigrationStatus",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "run_migrations",
    "verify_schema_integrity",
]
