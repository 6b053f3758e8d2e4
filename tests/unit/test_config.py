"""Tests for settings and logging helpers."""

from pathlib import Path

import pytest

from shopledger.config import get_settings, reset_settings
from shopledger.config.logging import add_app_context, round_money


class TestSettings:
    def test_env_prefixes(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("STORAGE_DB_NAME", "till.db")
        monkeypatch.setenv("INVENTORY_LOW_STOCK_THRESHOLD", "2.5")
        monkeypatch.setenv("API_PORT", "9100")
        reset_settings()

        settings = get_settings()

        assert settings.storage.db_path == tmp_path / "till.db"
        assert settings.storage.restore_path == tmp_path / "restore.db"
        assert settings.inventory.low_stock_threshold == 2.5
        assert settings.api.port == 9100

    def test_cached_until_reset(self):
        assert get_settings() is get_settings()
        first = get_settings()
        reset_settings()
        assert get_settings() is not first

    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        reset_settings()
        assert get_settings().log_level == "DEBUG"

    def test_invalid_port_rejected(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "0")
        reset_settings()
        with pytest.raises(ValueError):
            get_settings()


class TestLogProcessors:
    def test_round_money(self):
        event = round_money(
            None, "info", {"buying_price": 5.583333333, "quantity": 1.123456789}
        )
        assert event["buying_price"] == 5.5833
        assert event["quantity"] == 1.123456789

    def test_app_context_does_not_override(self):
        event = add_app_context(None, "info", {"app": "custom"})
        assert event["app"] == "custom"
        assert event["db"] == get_settings().storage.db_name
