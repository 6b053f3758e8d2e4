"""Storage infrastructure implementations."""

from shopledger.infrastructure.storage.sqlite import (
    Database,
    close_database,
    get_database,
)

__all__ = [
    "Database",
    "get_database",
    "close_database",
]
