"""
Balance Calculation

DESIGN DECISION: A balance is never stored. It is replayed from the
ledger every time it is asked for, one wallet at a time, in the order
the transactions were appended.

Two readers exist and they deliberately disagree:

- calculate_wallet_balance() is AUTHORITATIVE. It re-validates every
  record and stops at the first one that breaks an invariant.
- transaction_history() is COSMETIC. It applies every record as-is and
  never fails, so a history listing can show a negative running balance
  or an amount that calculate_wallet_balance() would reject.

Keep them separate. Making the history path validate (or the balance
path lenient) changes what users see.
"""

from collections.abc import Iterator, Sequence
from typing import Optional
from uuid import UUID

from wallet_tracker.audit import AuditLogger
from wallet_tracker.ledger.errors import InsufficientFundsError, InvalidAmountError
from wallet_tracker.models.transaction import HistoryEntry, Transaction, TransactionKind


def _for_wallet(
    transactions: Sequence[Transaction],
    wallet_id: str,
) -> Iterator[Transaction]:
    return (tx for tx in transactions if tx.wallet_id == wallet_id)


def calculate_wallet_balance(
    transactions: Sequence[Transaction],
    wallet_id: str,
    audit_logger: Optional[AuditLogger] = None,
    correlation_id: Optional[UUID] = None,
) -> int:
    """
    Calculate the current balance of one wallet.

    Replays the wallet's transactions in insertion order starting from 0.
    Transactions for other wallets are ignored; a wallet with no
    transactions has a balance of 0.

    Args:
        transactions: The full ledger, in insertion order
        wallet_id: Wallet to calculate the balance for
        audit_logger: Where replay events go. If None, events are only
                      logged locally.
        correlation_id: Ties the replay events to the calling action

    Returns:
        The balance after the last matching transaction

    Raises:
        InvalidAmountError: A matching transaction has a negative amount
        InsufficientFundsError: A withdrawal exceeds the balance
                                accumulated before it
    """
    audit_logger = audit_logger or AuditLogger()

    balance = 0
    count = 0

    for tx in _for_wallet(transactions, wallet_id):
        if tx.amount < 0:
            audit_logger.log_invalid_amount(tx, correlation_id=correlation_id)
            raise InvalidAmountError(tx.amount)

        if tx.kind is TransactionKind.DEPOSIT:
            balance += tx.amount
        else:
            # Point-in-time check: later deposits don't rescue an
            # earlier withdrawal
            if tx.amount > balance:
                audit_logger.log_insufficient_funds(
                    tx, available=balance, correlation_id=correlation_id
                )
                raise InsufficientFundsError(requested=tx.amount, available=balance)
            balance -= tx.amount

        count += 1
        audit_logger.log_transaction_applied(
            tx, running_balance=balance, correlation_id=correlation_id
        )

    audit_logger.log_balance_computed(
        wallet_id=wallet_id,
        balance=balance,
        transaction_count=count,
        correlation_id=correlation_id,
    )
    return balance


class TransactionHistory:
    """
    One wallet's transactions with the running balance after each.

    Lazy and restartable: every iteration replays the ledger from the
    start, so entries appended since the last pass show up on the next.

    NOTE: No validation happens here, see the module docstring.
    """

    def __init__(self, transactions: Sequence[Transaction], wallet_id: str):
        self._transactions = transactions
        self.wallet_id = wallet_id

    def __iter__(self) -> Iterator[HistoryEntry]:
        balance = 0
        for tx in _for_wallet(self._transactions, self.wallet_id):
            if tx.kind is TransactionKind.DEPOSIT:
                balance += tx.amount
            else:
                balance -= tx.amount
            yield HistoryEntry(tx, balance)

    def __repr__(self) -> str:
        return f"TransactionHistory(wallet_id={self.wallet_id!r})"


def transaction_history(
    transactions: Sequence[Transaction],
    wallet_id: str,
) -> TransactionHistory:
    """Get the display history of one wallet. Never raises."""
    return TransactionHistory(transactions, wallet_id)


def format_history(
    transactions: Sequence[Transaction],
    wallet_id: str,
) -> list[str]:
    """
    Render a wallet's history as display lines.

    The first line is a header, then one line per transaction:
        Transaction history for wallet wallet_1:
        Deposit of 100 to wallet_1 | Running balance: 100
    """
    lines = [f"Transaction history for wallet {wallet_id}:"]
    for entry in transaction_history(transactions, wallet_id):
        lines.append(f"{entry.transaction} | Running balance: {entry.running_balance}")
    return lines
