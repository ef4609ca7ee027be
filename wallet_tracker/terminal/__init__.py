"""Interactive terminal package."""

from wallet_tracker.terminal.session import WalletTerminal, main, parse_amount

__all__ = ["WalletTerminal", "main", "parse_amount"]
