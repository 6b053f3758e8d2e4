"""
Application settings with Pydantic v2 validation.

Each concern reads its own env prefix; `.env` is honoured for all of them.
The per-install backup schedule is not here: it lives in the database
settings table so the shop owner can change it at runtime.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Location and tuning of the SQLite file."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "shopledger.db"
    restore_file_name: str = "restore.db"  # staged by a restore, applied on start-up
    busy_timeout: int = Field(default=30000, ge=0, description="SQLite busy timeout in ms")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def restore_path(self) -> Path:
        return self.data_dir / self.restore_file_name


class BackupSettings(BaseSettings):
    """Install-wide backup defaults."""

    model_config = SettingsConfigDict(env_prefix="BACKUP_")

    default_dir: Path = Path("data/backups")
    file_prefix: str = Field(default="shopledger-auto", min_length=1)
    auto_backup_on_start: bool = True


class InventorySettings(BaseSettings):
    """Inventory reporting thresholds."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    low_stock_threshold: float = Field(default=5.0, ge=0)


class APISettings(BaseSettings):
    """HTTP server options."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "ShopLedger POS"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    backup: BackupSettings = Field(default_factory=BackupSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
