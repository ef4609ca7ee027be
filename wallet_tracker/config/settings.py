"""
Configuration Management for Wallet Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing about how balances are computed is configurable; only the
session's presentation and its log file are.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WalletSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from WALLET_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Presentation
    app_name: str = Field(
        default="Wallet Terminal",
        min_length=1,
        description="Name shown in the welcome and farewell messages"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Session log file
    log_to_file: bool = Field(
        default=True,
        description="Write session events to a log file"
    )
    log_dir: Path = Field(
        default=Path("logs/src"),
        description="Directory that receives one log file per session"
    )
    log_component: str = Field(
        default="Terminal",
        description="Component tag written on every log line"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level written to the log file"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}. Allowed: {', '.join(LOG_LEVELS)}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Debug mode always logs everything."""
        return "DEBUG" if self.debug_mode else self.log_level


@lru_cache()
def get_settings() -> WalletSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return WalletSettings()
