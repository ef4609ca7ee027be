"""
Data Models Package

This package contains the Pydantic models used in Wallet Tracker.
All data flowing through the system must conform to these schemas.
"""

from wallet_tracker.models.transaction import (
    HistoryEntry,
    Transaction,
    TransactionKind,
)
from wallet_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "HistoryEntry",
    "Transaction",
    "TransactionKind",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
