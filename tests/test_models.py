"""
Tests for Wallet Tracker models

Test strategy:
1. Unit tests for individual components (models, balance replay)
2. Flow tests for the orchestrator and the scripted terminal
3. No real log files outside tmp_path
"""

import pytest
from pydantic import ValidationError
from uuid import uuid4

from wallet_tracker.models.transaction import HistoryEntry, Transaction, TransactionKind
from wallet_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

from tests.conftest import deposit, withdrawal


class TestTransactionModels:
    """Tests for the transaction model."""

    def test_transaction_creation(self):
        """Test deposit and withdrawal creation."""
        deposit_tx = Transaction(
            kind=TransactionKind.DEPOSIT,
            wallet_id="wallet_1",
            amount=100,
        )
        withdrawal_tx = Transaction(
            kind=TransactionKind.WITHDRAWAL,
            wallet_id="wallet_2",
            amount=50,
        )

        assert deposit_tx.kind is TransactionKind.DEPOSIT
        assert deposit_tx.wallet_id == "wallet_1"
        assert deposit_tx.amount == 100
        assert deposit_tx.is_deposit is True

        assert withdrawal_tx.kind is TransactionKind.WITHDRAWAL
        assert withdrawal_tx.wallet_id == "wallet_2"
        assert withdrawal_tx.amount == 50
        assert withdrawal_tx.is_deposit is False

    def test_display_transaction(self):
        """Test the display format."""
        assert str(deposit("wallet_1", 100)) == "Deposit of 100 to wallet_1"

    def test_withdrawal_display_uses_to(self):
        """Withdrawals render with the same 'to' wording."""
        assert str(withdrawal("wallet_1", 30)) == "Withdrawal of 30 to wallet_1"

    def test_negative_amount_accepted_at_construction(self):
        """Negative amounts are caught on replay, not here."""
        tx = deposit("wallet_8", -100)
        assert tx.amount == -100

    def test_wallet_id_kept_verbatim(self):
        """Wallet ids are opaque; nothing is stripped or rejected."""
        assert deposit("", 1).wallet_id == ""
        assert deposit("  padded  ", 1).wallet_id == "  padded  "

    @pytest.mark.parametrize("amount", [True, "100", 3.0])
    def test_amount_must_be_an_integer(self, amount):
        """No coercion into the amount field."""
        with pytest.raises(ValidationError):
            Transaction(kind=TransactionKind.DEPOSIT, wallet_id="w", amount=amount)

    def test_transaction_is_immutable(self):
        """Stored transactions cannot be edited."""
        tx = deposit("wallet_1", 100)
        with pytest.raises(ValidationError):
            tx.amount = 200

    def test_kind_values(self):
        """Only the two kinds exist."""
        assert [k.value for k in TransactionKind] == ["Deposit", "Withdrawal"]
        with pytest.raises(ValueError):
            TransactionKind("Transfer")

    def test_history_entry_unpacks(self):
        """History entries are (transaction, balance) pairs."""
        tx = deposit("w", 5)
        entry = HistoryEntry(tx, 5)
        transaction, balance = entry
        assert transaction == tx
        assert balance == 5


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.SESSION_STARTED,
            description="Session started",
        )
        assert event.event_type == AuditEventType.SESSION_STARTED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.DEPOSIT_RECORDED,
            entity_type="wallet",
            entity_id="wallet_1",
            description="Deposit recorded",
            details={"amount": 100},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "deposit_recorded"
        assert log_dict["entity_id"] == "wallet_1"
        assert log_dict["details"]["amount"] == 100
        assert log_dict["correlation_id"] is None

    def test_builder_transaction_applied(self):
        """Replay events describe the direction of the funds."""
        event = AuditEventBuilder.transaction_applied(withdrawal("w", 30), 70)
        assert event.description == "Withdrawal of 30 from w"
        assert event.details["running_balance"] == 70

        event = AuditEventBuilder.transaction_applied(deposit("w", 100), 100)
        assert event.description == "Deposit of 100 to w"

    def test_builder_insufficient_funds(self):
        """Test AuditEventBuilder.insufficient_funds."""
        event = AuditEventBuilder.insufficient_funds(withdrawal("w", 100), available=50)
        assert event.severity == AuditSeverity.ERROR
        assert event.details == {"requested": 100, "available": 50}

    def test_builder_transaction_recorded(self):
        """Deposits and withdrawals get their own event types."""
        correlation_id = uuid4()
        event = AuditEventBuilder.transaction_recorded(deposit("w", 10), correlation_id)
        assert event.event_type == AuditEventType.DEPOSIT_RECORDED
        assert event.correlation_id == correlation_id
        assert event.is_user_action is True

        event = AuditEventBuilder.transaction_recorded(withdrawal("w", 10), correlation_id)
        assert event.event_type == AuditEventType.WITHDRAWAL_RECORDED

    def test_builder_truncates_long_input(self):
        """User-typed text never breaks the description length limit."""
        event = AuditEventBuilder.wallet_entered("x" * 1000, uuid4())
        assert len(event.description) == 500

    def test_replay_builders_truncate_long_wallet_ids(self):
        """Long wallet ids are cut in every replay event description."""
        wallet_id = "w" * 600
        events = [
            AuditEventBuilder.transaction_applied(deposit(wallet_id, 5), 5),
            AuditEventBuilder.insufficient_funds(withdrawal(wallet_id, 10), available=5),
            AuditEventBuilder.balance_computed(wallet_id, 5, transaction_count=1),
            AuditEventBuilder.balance_checked(wallet_id, 5, uuid4()),
        ]
        for event in events:
            assert len(event.description) == 500
            assert event.entity_id == wallet_id

    def test_event_description_is_truncated(self):
        """The model itself enforces the limit."""
        event = AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            description="y" * 501,
        )
        assert event.description == "y" * 500


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
