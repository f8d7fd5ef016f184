"""Tests for audit events and the audit logger."""

import pytest

from pocket_ledger.audit import AuditLogger, configure_logging
from pocket_ledger.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from pocket_ledger.storage import AuditStorageInterface, InMemoryAuditStorage, StorageError


class FailingAuditStorage(AuditStorageInterface):
    def append_event(self, event):
        raise StorageError("disk full")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            description="Budget set",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.is_user_action is False

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.income_recorded("alice", "1000", "Salary")
        log_dict = event.to_log_dict()

        assert "event_id" in log_dict
        assert log_dict["event_type"] == "income_recorded"
        assert log_dict["username"] == "alice"
        assert log_dict["details"] == {"amount": "1000", "category": "Salary"}

    def test_expense_rejected_is_warning(self):
        """Test rejected expenses are flagged as warnings."""
        event = AuditEventBuilder.expense_rejected("alice", "900", "Rent", "Insufficient funds")
        assert event.severity is AuditSeverity.WARNING
        assert event.details["reason"] == "Insufficient funds"

    def test_command_failed_is_error(self):
        event = AuditEventBuilder.command_failed("exit", "disk full")
        assert event.severity is AuditSeverity.ERROR
        assert event.username is None


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_log_persists_to_storage(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)

        assert logger.log(AuditEventBuilder.user_registered("alice")) is True
        assert logger.log(AuditEventBuilder.login_failed("bob")) is True

        assert [(e.event_type, e.username) for e in storage.events] == [
            (AuditEventType.USER_REGISTERED, "alice"),
            (AuditEventType.LOGIN_FAILED, "bob"),
        ]

    def test_log_without_storage(self):
        assert AuditLogger().log(AuditEventBuilder.users_saved(3)) is True

    def test_storage_failure_is_reported_not_raised(self):
        logger = AuditLogger(FailingAuditStorage())
        assert logger.log(AuditEventBuilder.users_saved(1)) is False


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
