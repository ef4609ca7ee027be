"""Transaction ledger package."""

from wallet_tracker.ledger.balance import (
    TransactionHistory,
    calculate_wallet_balance,
    format_history,
    transaction_history,
)
from wallet_tracker.ledger.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    WalletError,
)
from wallet_tracker.ledger.store import TransactionLedger

__all__ = [
    # Balance and history
    "TransactionHistory",
    "calculate_wallet_balance",
    "format_history",
    "transaction_history",
    # Errors
    "InsufficientFundsError",
    "InvalidAmountError",
    "WalletError",
    # Storage
    "TransactionLedger",
]
