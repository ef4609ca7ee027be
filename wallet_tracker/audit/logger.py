"""
Audit Logger

DESIGN DECISION: Every significant action in a session is logged.
This provides:
1. Complete traceability
2. Debugging capability when a balance replay fails
3. User can see history of their interactions in the log file

The audit logger:
- Is synchronous, like the rest of the ledger
- Gracefully handles sink failures (doesn't crash the session if logging fails)
- Supports correlation IDs to trace related events
- Never decides control flow: callers act on return values and exceptions,
  not on what was logged
"""

import logging
from pathlib import Path
from typing import Optional
from uuid import UUID, uuid4

import structlog

from wallet_tracker.audit.sinks import AuditSink
from wallet_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from wallet_tracker.models.transaction import Transaction


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

LOGGER_NAME = "wallet_tracker"
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

LOG_LINE_FORMAT = "%(asctime)s [%(levelname)s] [{component}] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (stdlib logging via structlog)
    2. An optional AuditSink (for in-session lookups)
    """

    def __init__(
        self,
        sink: Optional[AuditSink] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Destination for audit events.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger(LOGGER_NAME)

    @property
    def sink(self) -> Optional[AuditSink]:
        return self._sink

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if one is configured.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    # -------------------------------------------------------------------------
    # Balance replay
    # -------------------------------------------------------------------------

    def log_transaction_applied(
        self,
        transaction: Transaction,
        running_balance: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log one transaction folded into a balance."""
        self.log(AuditEventBuilder.transaction_applied(
            transaction=transaction,
            running_balance=running_balance,
            correlation_id=correlation_id,
        ))

    def log_invalid_amount(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a stored transaction with a negative amount."""
        self.log(AuditEventBuilder.invalid_amount(
            transaction=transaction,
            correlation_id=correlation_id,
        ))

    def log_insufficient_funds(
        self,
        transaction: Transaction,
        available: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a withdrawal that exceeds the running balance."""
        self.log(AuditEventBuilder.insufficient_funds(
            transaction=transaction,
            available=available,
            correlation_id=correlation_id,
        ))

    def log_balance_computed(
        self,
        wallet_id: str,
        balance: int,
        transaction_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log the final balance of a replay."""
        self.log(AuditEventBuilder.balance_computed(
            wallet_id=wallet_id,
            balance=balance,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        ))

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def log_session_started(self, session_id: UUID) -> None:
        self.log(AuditEventBuilder.session_started(session_id))

    def log_session_ended(self, session_id: UUID, transaction_count: int) -> None:
        self.log(AuditEventBuilder.session_ended(session_id, transaction_count))

    def log_menu_selected(self, choice: str, action: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.menu_selected(choice, action, correlation_id))

    def log_invalid_menu_choice(self, choice: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.invalid_menu_choice(choice, correlation_id))

    def log_wallet_entered(self, wallet_id: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.wallet_entered(wallet_id, correlation_id))

    def log_amount_entered(self, amount: int, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.amount_entered(amount, correlation_id))

    def log_amount_parse_failed(self, raw: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.amount_parse_failed(raw, correlation_id))

    # -------------------------------------------------------------------------
    # Ledger writes and reads
    # -------------------------------------------------------------------------

    def log_transaction_recorded(
        self,
        transaction: Transaction,
        correlation_id: UUID,
    ) -> None:
        """Log a transaction appended to the ledger."""
        self.log(AuditEventBuilder.transaction_recorded(
            transaction=transaction,
            correlation_id=correlation_id,
        ))

    def log_transaction_rejected(
        self,
        kind: str,
        wallet_id: str,
        amount: int,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        """Log a transaction the session refused to append."""
        self.log(AuditEventBuilder.transaction_rejected(
            kind=kind,
            wallet_id=wallet_id,
            amount=amount,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_balance_checked(
        self,
        wallet_id: str,
        balance: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.balance_checked(wallet_id, balance, correlation_id))

    def log_balance_check_failed(
        self,
        wallet_id: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.balance_check_failed(
            wallet_id, error_message, correlation_id
        ))

    def log_history_viewed(
        self,
        wallet_id: str,
        entry_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.history_viewed(wallet_id, entry_count, correlation_id))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., one menu choice).
    Pass it through all subsequent operations.
    """
    return uuid4()


def attach_log_file(
    log_file: Path,
    component: str = "Terminal",
    level: str = "INFO",
) -> logging.Handler:
    """
    Send audit log lines to a file.

    Each line reads "<date> <time> [LEVEL] [<component>] <json event>".
    The parent directory is created if needed; OSError propagates to the
    caller when the file cannot be opened.

    Returns the installed handler so callers can detach it again.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(
        LOG_LINE_FORMAT.format(component=component),
        datefmt=LOG_DATE_FORMAT,
    ))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def detach_log_file(handler: logging.Handler) -> None:
    """Remove and close a handler installed by attach_log_file."""
    logging.getLogger(LOGGER_NAME).removeHandler(handler)
    handler.close()
