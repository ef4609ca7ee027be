"""Shared fixtures for Wallet Tracker tests."""

import pytest

from wallet_tracker.audit import AuditLogger, InMemoryAuditSink
from wallet_tracker.models.transaction import Transaction, TransactionKind


def deposit(wallet_id: str, amount: int) -> Transaction:
    return Transaction(kind=TransactionKind.DEPOSIT, wallet_id=wallet_id, amount=amount)


def withdrawal(wallet_id: str, amount: int) -> Transaction:
    return Transaction(kind=TransactionKind.WITHDRAWAL, wallet_id=wallet_id, amount=amount)


@pytest.fixture
def audit_sink() -> InMemoryAuditSink:
    return InMemoryAuditSink()


@pytest.fixture
def audit_logger(audit_sink: InMemoryAuditSink) -> AuditLogger:
    return AuditLogger(audit_sink)
