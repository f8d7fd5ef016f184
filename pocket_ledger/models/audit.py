"""
Audit Models for Pocket Ledger

Every state change and every authentication attempt produces an audit
event. Audit events are append-only: they are never edited or removed.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Accounts
    USER_REGISTERED = "user_registered"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGGED_OUT = "logged_out"

    # Ledger
    INCOME_RECORDED = "income_recorded"
    EXPENSE_RECORDED = "expense_recorded"
    EXPENSE_REJECTED = "expense_rejected"
    BUDGET_SET = "budget_set"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Persistence
    USERS_SAVED = "users_saved"

    # Dispatcher
    COMMAND_FAILED = "command_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    username: Optional[str] = Field(
        default=None,
        description="User the event relates to, if any"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered directly by a user command?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "username": self.username,
            "description": self.description,
            "details": self.details,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.income_recorded("alice", amount, "Salary")
        event = AuditEventBuilder.login_failed("alice")
    """

    @staticmethod
    def user_registered(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_REGISTERED,
            username=username,
            description=f"User registered: {username}",
            is_user_action=True,
        )

    @staticmethod
    def login_succeeded(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            username=username,
            description=f"User logged in: {username}",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            username=username,
            description=f"Failed login attempt for: {username}",
            is_user_action=True,
        )

    @staticmethod
    def logged_out(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGGED_OUT,
            username=username,
            description=f"User logged out: {username}",
            is_user_action=True,
        )

    @staticmethod
    def income_recorded(username: str, amount: str, category: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_RECORDED,
            username=username,
            description=f"Income recorded: {amount} ({category})",
            details={"amount": amount, "category": category},
            is_user_action=True,
        )

    @staticmethod
    def expense_recorded(username: str, amount: str, category: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_RECORDED,
            username=username,
            description=f"Expense recorded: {amount} ({category})",
            details={"amount": amount, "category": category},
            is_user_action=True,
        )

    @staticmethod
    def expense_rejected(
        username: str,
        amount: str,
        category: str,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            username=username,
            description=f"Expense rejected: {amount} ({category})",
            details={"amount": amount, "category": category, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def budget_set(username: str, category: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            username=username,
            description=f"Budget set: {category} = {amount}",
            details={"category": category, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def budget_exceeded(
        username: str,
        category: str,
        amount: str,
        remaining: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EXCEEDED,
            severity=AuditSeverity.WARNING,
            username=username,
            description=f"Budget exceeded for category: {category}",
            details={"category": category, "amount": amount, "remaining": remaining},
        )

    @staticmethod
    def users_saved(user_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USERS_SAVED,
            description=f"Saved {user_count} users",
            details={"user_count": user_count},
        )

    @staticmethod
    def command_failed(
        command: str,
        error_message: str,
        username: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_FAILED,
            severity=AuditSeverity.ERROR,
            username=username,
            description=f"Command failed: {command}",
            details={"command": command, "error": error_message},
            is_user_action=True,
        )
