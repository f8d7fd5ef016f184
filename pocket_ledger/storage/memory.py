"""
In-Memory Storage

Non-persistent implementations of the storage interfaces, for tests and
throwaway sessions.
"""

from typing import Optional

from pocket_ledger.models.audit import AuditEvent
from pocket_ledger.models.user import User
from pocket_ledger.storage.interface import AuditStorageInterface, UserStorageInterface


class InMemoryUserStorage(UserStorageInterface):
    """Keeps the saved user set in a dict."""

    def __init__(self, users: Optional[dict[str, User]] = None):
        self._users: dict[str, User] = dict(users or {})
        self.save_count = 0

    def load_users(self) -> dict[str, User]:
        return dict(self._users)

    def save_users(self, users: dict[str, User]) -> None:
        self._users = dict(users)
        self.save_count += 1


class InMemoryAuditStorage(AuditStorageInterface):
    """Keeps audit events in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True
