"""Infrastructure layer implementations."""

from shopledger.infrastructure import backup, storage

__all__ = ["storage", "backup"]
