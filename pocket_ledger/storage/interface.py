"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep users in a JSON file today and swap in a database later
2. Use in-memory storage for testing
3. Keep the ledger core free of any file access

The user set is loaded once at startup and saved on exit, the same way
the console app always worked.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pocket_ledger.models.audit import AuditEvent
from pocket_ledger.models.user import User


class UserStorageInterface(ABC):
    """
    Abstract interface for persisting the user set.

    A user record carries the credential hash and the full wallet
    (balance, transaction history and budgets).
    """

    @abstractmethod
    def load_users(self) -> dict[str, User]:
        """
        Load every stored user.

        Returns:
            Mapping of username to user. Empty if nothing is stored yet.

        Raises:
            CorruptStorageError: If the stored data cannot be read back
        """
        pass

    @abstractmethod
    def save_users(self, users: dict[str, User]) -> None:
        """
        Replace the stored user set.

        Args:
            users: Mapping of username to user

        Raises:
            StorageError: If the write fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class CorruptStorageError(StorageError):
    """Stored data exists but cannot be parsed or fails validation."""
    pass
