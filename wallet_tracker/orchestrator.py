"""
Main Orchestrator for Wallet Tracker

This module ties the ledger, the balance calculation and the audit
logger together and defines the session operations:
1. Check balance (replay → report)
2. Deposit (validate → append)
3. Withdraw (validate → replay → sufficiency check → append)
4. View history (replay without validation → render)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Only positive amounts are ever appended
- A withdrawal is appended only if the current balance covers it
- The balance calculation still re-validates everything on read
- Every step is audited

The terminal is a thin layer over this class: it parses input, calls
one of these methods and prints the outcome.
"""

from typing import Optional
from uuid import UUID

from wallet_tracker.audit import AuditLogger, InMemoryAuditSink, create_correlation_id
from wallet_tracker.ledger import (
    InsufficientFundsError,
    TransactionHistory,
    TransactionLedger,
    WalletError,
    calculate_wallet_balance,
    format_history,
    transaction_history,
)
from wallet_tracker.models.transaction import Transaction, TransactionKind


class TransactionRejectedError(WalletError):
    """The session refused to append a transaction."""

    def __init__(self, amount: int, reason: str = "Amount must be positive"):
        self.amount = amount
        self.reason = reason
        super().__init__(reason)


class BalanceReplayError(WalletError):
    """
    The wallet's existing transactions failed to replay.

    Raised by withdraw() so that a broken history is not mistaken for a
    plain shortfall. The underlying ledger error is kept as `error`.
    """

    def __init__(self, error: WalletError):
        self.error = error
        super().__init__(str(error))


class WalletFlow:
    """
    Orchestrates all ledger operations of one session.

    The flow owns the session's TransactionLedger. The ledger core only
    ever reads it; appends happen here and nowhere else.
    """

    def __init__(
        self,
        ledger: Optional[TransactionLedger] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger = ledger if ledger is not None else TransactionLedger()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def ledger(self) -> TransactionLedger:
        return self._ledger

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def check_balance(
        self,
        wallet_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> int:
        """
        Replay a wallet's transactions and return its balance.

        Raises:
            WalletError: If the replay hits an invalid record
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            balance = calculate_wallet_balance(
                self._ledger,
                wallet_id,
                audit_logger=self._audit_logger,
                correlation_id=correlation_id,
            )
        except WalletError as e:
            self._audit_logger.log_balance_check_failed(
                wallet_id=wallet_id,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        self._audit_logger.log_balance_checked(
            wallet_id=wallet_id,
            balance=balance,
            correlation_id=correlation_id,
        )
        return balance

    def deposit(
        self,
        wallet_id: str,
        amount: int,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Append a deposit.

        Raises:
            TransactionRejectedError: If amount is not positive
        """
        correlation_id = correlation_id or create_correlation_id()

        self._require_positive(TransactionKind.DEPOSIT, wallet_id, amount, correlation_id)
        return self._append(TransactionKind.DEPOSIT, wallet_id, amount, correlation_id)

    def withdraw(
        self,
        wallet_id: str,
        amount: int,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Append a withdrawal if the wallet's current balance covers it.

        Raises:
            TransactionRejectedError: If amount is not positive
            InsufficientFundsError: If the current balance is below amount
            BalanceReplayError: If replaying the wallet's balance fails
        """
        correlation_id = correlation_id or create_correlation_id()

        self._require_positive(TransactionKind.WITHDRAWAL, wallet_id, amount, correlation_id)

        try:
            balance = calculate_wallet_balance(
                self._ledger,
                wallet_id,
                audit_logger=self._audit_logger,
                correlation_id=correlation_id,
            )
        except WalletError as e:
            self._audit_logger.log_transaction_rejected(
                kind=TransactionKind.WITHDRAWAL.value,
                wallet_id=wallet_id,
                amount=amount,
                reason=str(e),
                correlation_id=correlation_id,
            )
            raise BalanceReplayError(e) from e

        if balance < amount:
            error = InsufficientFundsError(requested=amount, available=balance)
            self._audit_logger.log_transaction_rejected(
                kind=TransactionKind.WITHDRAWAL.value,
                wallet_id=wallet_id,
                amount=amount,
                reason=str(error),
                correlation_id=correlation_id,
            )
            raise error

        return self._append(TransactionKind.WITHDRAWAL, wallet_id, amount, correlation_id)

    def history(self, wallet_id: str) -> TransactionHistory:
        """Running-balance history of a wallet (unvalidated, never fails)."""
        return transaction_history(self._ledger, wallet_id)

    def view_history(
        self,
        wallet_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> list[str]:
        """Render a wallet's history as display lines."""
        correlation_id = correlation_id or create_correlation_id()

        lines = format_history(self._ledger, wallet_id)
        self._audit_logger.log_history_viewed(
            wallet_id=wallet_id,
            entry_count=len(lines) - 1,
            correlation_id=correlation_id,
        )
        return lines

    def _require_positive(
        self,
        kind: TransactionKind,
        wallet_id: str,
        amount: int,
        correlation_id: UUID,
    ) -> None:
        if amount > 0:
            return

        error = TransactionRejectedError(amount)
        self._audit_logger.log_transaction_rejected(
            kind=kind.value,
            wallet_id=wallet_id,
            amount=amount,
            reason=error.reason,
            correlation_id=correlation_id,
        )
        raise error

    def _append(
        self,
        kind: TransactionKind,
        wallet_id: str,
        amount: int,
        correlation_id: UUID,
    ) -> Transaction:
        transaction = Transaction(kind=kind, wallet_id=wallet_id, amount=amount)
        self._ledger.append(transaction)
        self._audit_logger.log_transaction_recorded(
            transaction=transaction,
            correlation_id=correlation_id,
        )
        return transaction


def create_app_components() -> tuple[WalletFlow, InMemoryAuditSink]:
    """
    Factory function to create the components of one session.

    Returns:
        (wallet_flow, audit_sink)
    """
    audit_sink = InMemoryAuditSink()
    audit_logger = AuditLogger(audit_sink)

    wallet_flow = WalletFlow(
        ledger=TransactionLedger(),
        audit_logger=audit_logger,
    )

    return wallet_flow, audit_sink
