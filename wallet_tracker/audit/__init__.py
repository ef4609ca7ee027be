"""Audit logging package."""

from wallet_tracker.audit.logger import (
    AuditLogger,
    attach_log_file,
    create_correlation_id,
    detach_log_file,
)
from wallet_tracker.audit.sinks import AuditSink, InMemoryAuditSink

__all__ = [
    "AuditLogger",
    "AuditSink",
    "InMemoryAuditSink",
    "attach_log_file",
    "create_correlation_id",
    "detach_log_file",
]
