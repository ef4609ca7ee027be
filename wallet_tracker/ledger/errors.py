"""
Ledger Errors

Both errors are ordinary, recoverable failures. The ledger raises them,
the session reports them and carries on.
"""


class WalletError(Exception):
    """Base exception for wallet operations."""
    pass


class InvalidAmountError(WalletError):
    """A stored transaction carries a negative amount."""

    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"Invalid transaction amount: {amount}")


class InsufficientFundsError(WalletError):
    """A withdrawal exceeds the balance accumulated before it."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient funds for withdrawal of {requested}. "
            f"Available balance: {available}"
        )
