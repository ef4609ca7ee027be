"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from wallet_tracker.config import WalletSettings, get_settings


class TestWalletSettings:

    def test_defaults(self, monkeypatch):
        """Test default values without any environment."""
        for name in ("APP_NAME", "LOG_DIR", "LOG_LEVEL", "LOG_TO_FILE", "DEBUG_MODE"):
            monkeypatch.delenv(f"WALLET_{name}", raising=False)

        settings = WalletSettings(_env_file=None)
        assert settings.app_name == "Wallet Terminal"
        assert settings.log_dir == Path("logs/src")
        assert settings.log_component == "Terminal"
        assert settings.log_level == "INFO"
        assert settings.log_to_file is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WALLET_APP_NAME", "Demo Wallet")
        monkeypatch.setenv("WALLET_LOG_TO_FILE", "false")
        monkeypatch.setenv("WALLET_LOG_LEVEL", "warning")

        settings = WalletSettings(_env_file=None)
        assert settings.app_name == "Demo Wallet"
        assert settings.log_to_file is False
        assert settings.log_level == "WARNING"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            WalletSettings(_env_file=None, log_level="chatty")

    def test_debug_mode_forces_debug_logging(self):
        settings = WalletSettings(_env_file=None, log_level="ERROR", debug_mode=True)
        assert settings.effective_log_level == "DEBUG"

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
