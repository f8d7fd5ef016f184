"""
Data Models Package

Pydantic models for the ledger, its users, computed reports and the
audit trail.
"""

from pocket_ledger.models.transaction import Transaction, TransactionType
from pocket_ledger.models.wallet import (
    BudgetExceededError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCategoryError,
    LedgerError,
    Wallet,
)
from pocket_ledger.models.user import User
from pocket_ledger.models.report import (
    CategoryBudgetStatus,
    CategoryNotFound,
    FinanceSummary,
)
from pocket_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Transaction",
    "TransactionType",
    "User",
    "Wallet",
    # Ledger errors
    "BudgetExceededError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidCategoryError",
    "LedgerError",
    # Report models
    "CategoryBudgetStatus",
    "CategoryNotFound",
    "FinanceSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
