"""
Core Data Models for Wallet Tracker

These models define the records the ledger is made of.

DESIGN DECISION: A Transaction is immutable once created. Its amount is
NOT range-checked here: a negative amount on a stored record is detected
when the ledger is replayed, because the balance calculation is the
authoritative guard.
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Supported transaction kinds.

    This set is closed. Adding a kind changes how balances are computed,
    so it is never configuration.
    """
    DEPOSIT = "Deposit"        # Funds added to a wallet
    WITHDRAWAL = "Withdrawal"  # Funds removed from a wallet


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single deposit or withdrawal against a wallet.

    Wallet identifiers are opaque: any string is accepted as-is,
    including the empty string.
    """
    model_config = ConfigDict(frozen=True)

    kind: TransactionKind = Field(
        ...,
        description="Deposit or withdrawal"
    )
    wallet_id: str = Field(
        ...,
        description="Identifier of the wallet the funds move in or out of"
    )
    amount: int = Field(
        ...,
        strict=True,
        description="Amount in integer units"
    )

    @property
    def is_deposit(self) -> bool:
        return self.kind is TransactionKind.DEPOSIT

    def __str__(self) -> str:
        return f"{self.kind.value} of {self.amount} to {self.wallet_id}"


class HistoryEntry(NamedTuple):
    """A transaction paired with the running balance after applying it."""
    transaction: Transaction
    running_balance: int
