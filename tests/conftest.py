"""Shared fixtures for the Pocket Ledger test suite."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from pocket_ledger.audit import AuditLogger
from pocket_ledger.auth import AuthService, hash_password
from pocket_ledger.commands import CommandProcessor, Session
from pocket_ledger.models.user import User
from pocket_ledger.services import FinanceService, NotificationService
from pocket_ledger.storage import InMemoryAuditStorage, InMemoryUserStorage

# Low iteration count keeps hashing fast in tests
TEST_HASH_ITERATIONS = 1_000

CLOCK_START = datetime(2024, 12, 1, 10, 0, 0)


@pytest.fixture
def fixed_clock(monkeypatch):
    """Transactions get timestamps 10:00, 10:01, 10:02, ... on 2024-12-01."""
    ticks = iter(CLOCK_START + timedelta(minutes=i) for i in range(10_000))
    monkeypatch.setattr("pocket_ledger.models.wallet._now", lambda: next(ticks))
    return CLOCK_START


@pytest.fixture
def user():
    return User(
        username="alice",
        password_hash=hash_password("secret", iterations=TEST_HASH_ITERATIONS),
    )


@pytest.fixture
def funded_user(user, fixed_clock):
    """alice with Salary 1000 in, Food 200 out, Food budget 150."""
    user.wallet.add_income(Decimal("1000"), "Salary")
    user.wallet.add_expense(Decimal("200"), "Food")
    user.wallet.set_budget("Food", Decimal("150"))
    return user


@pytest.fixture
def finance():
    return FinanceService()


@pytest.fixture
def user_storage():
    return InMemoryUserStorage()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def auth(user_storage):
    return AuthService(user_storage, hash_iterations=TEST_HASH_ITERATIONS)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def processor(auth, finance, notices, audit_storage):
    return CommandProcessor(
        auth=auth,
        finance=finance,
        notifications=NotificationService(sink=notices.append),
        audit=AuditLogger(audit_storage),
    )


@pytest.fixture
def session():
    return Session()
