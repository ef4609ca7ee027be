"""Configuration package."""

from wallet_tracker.config.settings import WalletSettings, get_settings

__all__ = [
    "WalletSettings",
    "get_settings",
]
