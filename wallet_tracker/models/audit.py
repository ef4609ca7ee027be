"""
Audit Models for Wallet Tracker

Every significant action in a session is logged for audit purposes.
This provides:
1. A readable trail of what the user did and what the ledger answered
2. Debugging information when a balance replay fails
3. Ability to reconstruct a session from its log file

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
Audit events are a side channel: nothing in the ledger reads them back
to decide what to do.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from wallet_tracker.models.transaction import Transaction


DESCRIPTION_MAX_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Balance replay events come from the ledger core, the rest from the
    interactive session.
    """
    # Balance replay
    TRANSACTION_APPLIED = "transaction_applied"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    BALANCE_COMPUTED = "balance_computed"

    # Session lifecycle
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"

    # User input
    MENU_SELECTED = "menu_selected"
    INVALID_MENU_CHOICE = "invalid_menu_choice"
    WALLET_ENTERED = "wallet_entered"
    AMOUNT_ENTERED = "amount_entered"
    AMOUNT_PARSE_FAILED = "amount_parse_failed"

    # Ledger writes
    DEPOSIT_RECORDED = "deposit_recorded"
    WITHDRAWAL_RECORDED = "withdrawal_recorded"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Ledger reads
    BALANCE_CHECKED = "balance_checked"
    BALANCE_CHECK_FAILED = "balance_check_failed"
    HISTORY_VIEWED = "history_viewed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'wallet', 'session')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to (e.g., the wallet id)"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events of one menu action)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v: Any) -> Any:
        """Wallet ids and raw input are embedded verbatim; keep the limit."""
        if isinstance(v, str):
            return v[:DESCRIPTION_MAX_LENGTH]
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_applied(tx, balance)
        event = AuditEventBuilder.deposit_recorded(tx, correlation_id)
    """

    # -------------------------------------------------------------------------
    # Balance replay
    # -------------------------------------------------------------------------

    @staticmethod
    def transaction_applied(
        transaction: Transaction,
        running_balance: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        direction = "to" if transaction.is_deposit else "from"
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_APPLIED,
            entity_type="wallet",
            entity_id=transaction.wallet_id,
            correlation_id=correlation_id,
            description=(
                f"{transaction.kind.value} of {transaction.amount} "
                f"{direction} {transaction.wallet_id}"
            ),
            details={
                "kind": transaction.kind.value,
                "amount": transaction.amount,
                "running_balance": running_balance,
            },
        )

    @staticmethod
    def invalid_amount(
        transaction: Transaction,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_AMOUNT,
            severity=AuditSeverity.ERROR,
            entity_type="wallet",
            entity_id=transaction.wallet_id,
            correlation_id=correlation_id,
            description=(
                f"Invalid transaction amount: {transaction.amount} "
                f"in transaction {transaction!r}"
            ),
            error_code="invalid_amount",
            error_message=f"Invalid transaction amount: {transaction.amount}",
            details={
                "kind": transaction.kind.value,
                "amount": transaction.amount,
            },
        )

    @staticmethod
    def insufficient_funds(
        transaction: Transaction,
        available: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INSUFFICIENT_FUNDS,
            severity=AuditSeverity.ERROR,
            entity_type="wallet",
            entity_id=transaction.wallet_id,
            correlation_id=correlation_id,
            description=(
                f"Insufficient funds for withdrawal of {transaction.amount} "
                f"from {transaction.wallet_id}. Available balance: {available}"
            ),
            error_code="insufficient_funds",
            details={
                "requested": transaction.amount,
                "available": available,
            },
        )

    @staticmethod
    def balance_computed(
        wallet_id: str,
        balance: int,
        transaction_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_COMPUTED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Final balance for wallet {wallet_id}: {balance}",
            details={
                "balance": balance,
                "transaction_count": transaction_count,
            },
        )

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    @staticmethod
    def session_started(session_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            entity_type="session",
            entity_id=str(session_id),
            correlation_id=session_id,
            description="Starting wallet terminal session",
        )

    @staticmethod
    def session_ended(session_id: UUID, transaction_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_ENDED,
            entity_type="session",
            entity_id=str(session_id),
            correlation_id=session_id,
            description="Terminating wallet terminal session",
            details={
                "transaction_count": transaction_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def menu_selected(
        choice: str,
        action: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MENU_SELECTED,
            correlation_id=correlation_id,
            description=f"Selected: {action}",
            details={
                "choice": choice,
                "action": action,
            },
            is_user_action=True,
        )

    @staticmethod
    def invalid_menu_choice(choice: str, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_MENU_CHOICE,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Invalid menu choice entered: {choice}",
            details={
                "choice": choice,
            },
            is_user_action=True,
        )

    @staticmethod
    def wallet_entered(wallet_id: str, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WALLET_ENTERED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Wallet address entered: {wallet_id}",
            is_user_action=True,
        )

    @staticmethod
    def amount_entered(amount: int, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_ENTERED,
            correlation_id=correlation_id,
            description=f"Amount entered: {amount}",
            details={
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def amount_parse_failed(raw: str, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_PARSE_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Invalid amount entered: {raw}",
            details={
                "raw_input": raw,
                "substituted_amount": 0,
            },
            is_user_action=True,
        )

    # -------------------------------------------------------------------------
    # Ledger writes and reads
    # -------------------------------------------------------------------------

    @staticmethod
    def transaction_recorded(
        transaction: Transaction,
        correlation_id: UUID
    ) -> AuditEvent:
        if transaction.is_deposit:
            event_type = AuditEventType.DEPOSIT_RECORDED
            description = (
                f"Successful deposit of {transaction.amount} "
                f"to wallet {transaction.wallet_id}"
            )
        else:
            event_type = AuditEventType.WITHDRAWAL_RECORDED
            description = (
                f"Successful withdrawal of {transaction.amount} "
                f"from wallet {transaction.wallet_id}"
            )
        return AuditEvent(
            event_type=event_type,
            entity_type="wallet",
            entity_id=transaction.wallet_id,
            correlation_id=correlation_id,
            description=description,
            details={
                "kind": transaction.kind.value,
                "amount": transaction.amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_rejected(
        kind: str,
        wallet_id: str,
        amount: int,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.ERROR,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Rejected {kind.lower()} of {amount}: {reason}",
            error_message=reason,
            details={
                "kind": kind,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def balance_checked(
        wallet_id: str,
        balance: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_CHECKED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Balance check successful for {wallet_id}: {balance}",
            details={
                "balance": balance,
            },
            is_user_action=True,
        )

    @staticmethod
    def balance_check_failed(
        wallet_id: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_CHECK_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Balance check failed for {wallet_id}",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def history_viewed(
        wallet_id: str,
        entry_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_VIEWED,
            entity_type="wallet",
            entity_id=wallet_id,
            correlation_id=correlation_id,
            description=f"Viewing transaction history for wallet {wallet_id}",
            details={
                "entry_count": entry_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
