"""
Wallet Model

The wallet is a user's ledger: running balance, append-only transaction
history, and per-category budget limits.

INVARIANTS:
1. balance == sum(income) - sum(expense) over the history
2. balance never goes negative; an expense larger than the balance is
   rejected in full and leaves the wallet untouched
3. budgets are advisory: overspending a category is logged, not blocked
   (unless the caller opts into hard enforcement)

The balance is cached and updated incrementally. When a wallet is loaded
from storage the cached value is checked against the history.
"""

import threading
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal, Inexact, localcontext
from typing import Annotated, Any, Iterator, Optional, Union

import structlog
from pydantic import BaseModel, Field, PrivateAttr, model_validator

from pocket_ledger.models.transaction import Transaction, TransactionType


logger = structlog.get_logger(__name__)

ZERO = Decimal("0")

Amount = Union[Decimal, int]


class LedgerError(Exception):
    """Base exception for ledger business-rule violations."""
    pass


class InsufficientFundsError(LedgerError):
    """An expense would drive the balance below zero."""

    def __init__(self, amount: Decimal, balance: Decimal, category: str):
        self.amount = amount
        self.balance = balance
        self.category = category
        self.shortfall = amount - balance
        super().__init__(
            f"Insufficient funds: expense of {amount} in '{category}' exceeds "
            f"balance {balance} by {self.shortfall}"
        )


class BudgetExceededError(LedgerError):
    """An expense would overrun a category budget under hard enforcement."""

    def __init__(self, amount: Decimal, remaining: Decimal, category: str):
        self.amount = amount
        self.remaining = remaining
        self.category = category
        super().__init__(
            f"Budget exceeded for category '{category}': expense of {amount}, "
            f"remaining budget {remaining}"
        )


class InvalidAmountError(LedgerError, ValueError):
    """Amount is not a finite positive Decimal (or negative, for budgets)."""
    pass


class InvalidCategoryError(LedgerError, ValueError):
    """Category is not a non-empty string."""
    pass


def _now() -> datetime:
    return datetime.now()


def _check_amount(amount: Amount, allow_zero: bool = False) -> Decimal:
    # bool is an int subclass; floats are refused outright
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int)):
        raise InvalidAmountError(f"Amount must be a Decimal, got {type(amount).__name__}")
    value = Decimal(amount)
    if not value.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise InvalidAmountError(f"Amount must be {bound}, got {value}")
    return value


def _check_category(category: str) -> str:
    if not isinstance(category, str) or not category:
        raise InvalidCategoryError("Category must be a non-empty string")
    return category


@contextmanager
def _exact_arithmetic() -> Iterator[None]:
    """Decimal arithmetic that raises instead of rounding."""
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            yield
        except Inexact:
            raise InvalidAmountError(
                f"Amount exceeds {ctx.prec} significant digits and cannot be recorded exactly"
            ) from None


class Wallet(BaseModel):
    """
    Per-user ledger.

    All mutations and history scans run under a re-entrant lock so a
    wallet shared between threads stays consistent.
    """

    balance: Decimal = Field(
        default=ZERO,
        ge=0,
        description="Current balance (cached aggregate of the history)"
    )
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Append-only history in chronological order"
    )
    budgets: dict[str, Annotated[Decimal, Field(ge=0, allow_inf_nan=False)]] = Field(
        default_factory=dict,
        description="Spending limit per category"
    )

    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    @model_validator(mode='after')
    def validate_balance(self) -> 'Wallet':
        """Reject a stored balance that does not match the history."""
        running = ZERO
        with _exact_arithmetic():
            for transaction in self.transactions:
                running += transaction.signed_amount
                if running < 0:
                    raise ValueError("Transaction history drives the balance negative")
        if running != self.balance:
            raise ValueError(
                f"Balance {self.balance} does not match transaction history ({running})"
            )
        return self

    def __deepcopy__(self, memo: Optional[dict[int, Any]] = None) -> 'Wallet':
        # locks cannot be copied; the copy gets its own
        with self._lock:
            clone = Wallet(
                balance=self.balance,
                transactions=list(self.transactions),
                budgets=dict(self.budgets),
            )
        if memo is not None:
            memo[id(self)] = clone
        return clone

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_income(self, amount: Amount, category: str) -> Transaction:
        """Record income and raise the balance."""
        amount = _check_amount(amount)
        category = _check_category(category)

        with self._lock:
            with _exact_arithmetic():
                balance = self.balance + amount
            transaction = Transaction(
                amount=amount,
                timestamp=_now(),
                kind=TransactionType.INCOME,
                category=category,
            )
            self.balance = balance
            self.transactions.append(transaction)

        logger.info(
            "income_recorded",
            amount=str(amount),
            category=category,
            balance=str(self.balance),
        )
        return transaction

    def add_expense(
        self,
        amount: Amount,
        category: str,
        *,
        enforce_budget: bool = False,
    ) -> Transaction:
        """
        Record an expense and lower the balance.

        Overrunning the category budget is only logged. With
        enforce_budget=True it raises BudgetExceededError instead, but only
        for categories that have an explicit budget.

        Raises:
            InsufficientFundsError: balance is smaller than amount.
                The wallet is left unchanged.
        """
        amount = _check_amount(amount)
        category = _check_category(category)

        with self._lock:
            remaining = self.get_budget_remain(category)
            if amount > remaining:
                if enforce_budget and category in self.budgets:
                    raise BudgetExceededError(amount, remaining, category)
                logger.warning(
                    "budget_exceeded",
                    category=category,
                    amount=str(amount),
                    remaining=str(remaining),
                )

            if self.balance < amount:
                logger.warning(
                    "expense_rejected",
                    category=category,
                    amount=str(amount),
                    balance=str(self.balance),
                )
                raise InsufficientFundsError(amount, self.balance, category)

            with _exact_arithmetic():
                balance = self.balance - amount
            transaction = Transaction(
                amount=amount,
                timestamp=_now(),
                kind=TransactionType.EXPENSE,
                category=category,
            )
            self.balance = balance
            self.transactions.append(transaction)

        logger.info(
            "expense_recorded",
            amount=str(amount),
            category=category,
            balance=str(self.balance),
        )
        return transaction

    def set_budget(self, category: str, amount: Amount) -> None:
        """Set (or replace) the spending limit for a category."""
        amount = _check_amount(amount, allow_zero=True)
        category = _check_category(category)
        with self._lock:
            self.budgets[category] = amount
        logger.info("budget_set", category=category, amount=str(amount))

    # -------------------------------------------------------------------------
    # Budget queries
    # -------------------------------------------------------------------------

    def get_budget(self, category: str) -> Decimal:
        """Budget limit for a category, zero when none is set."""
        return self.budgets.get(category, ZERO)

    def get_budget_spent(self, category: str) -> Decimal:
        """Total expenses in a category over the whole history."""
        with self._lock, _exact_arithmetic():
            return sum(
                (
                    t.amount
                    for t in self.transactions
                    if t.category == category and t.kind is TransactionType.EXPENSE
                ),
                ZERO,
            )

    def get_budget_remain(self, category: str) -> Decimal:
        """Budget minus spent. Negative when the category is overspent."""
        with self._lock, _exact_arithmetic():
            return self.get_budget(category) - self.get_budget_spent(category)

    def has_budget(self, category: str) -> bool:
        """True when the category has an explicit limit (zero included)."""
        return category in self.budgets

    def exceeds_budget(self, amount: Amount, category: str) -> bool:
        """Would this expense overrun the remaining budget of the category?"""
        return _check_amount(amount) > self.get_budget_remain(category)

    # -------------------------------------------------------------------------
    # History queries
    # -------------------------------------------------------------------------

    def get_transactions(self) -> list[Transaction]:
        """Copy of the full history, oldest first."""
        with self._lock:
            return list(self.transactions)

    def get_transactions_by_category(self, category: str) -> list[Transaction]:
        """Transactions whose category equals `category` exactly, oldest first."""
        with self._lock:
            return [t for t in self.transactions if t.category == category]

    def total_by_type(self, kind: TransactionType) -> Decimal:
        with self._lock, _exact_arithmetic():
            return sum((t.amount for t in self.transactions if t.kind is kind), ZERO)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def get_all_categories(self) -> set[str]:
        """Union of categories seen in the history and categories with a budget."""
        with self._lock:
            categories = set(self.budgets)
            categories.update(t.category for t in self.transactions)
            return categories

    def get_income_categories(self) -> set[str]:
        with self._lock:
            return {t.category for t in self.transactions if t.kind is TransactionType.INCOME}

    def get_expense_categories(self) -> set[str]:
        """Categories with at least one expense, plus every budgeted category."""
        with self._lock:
            categories = set(self.budgets)
            categories.update(
                t.category for t in self.transactions if t.kind is TransactionType.EXPENSE
            )
            return categories

    def has_category(self, category: str) -> bool:
        with self._lock:
            return category in self.budgets or any(
                t.category == category for t in self.transactions
            )

    def categories_for(self, kind: Optional[TransactionType] = None) -> set[str]:
        """All categories, or the income/expense-scoped set."""
        if kind is TransactionType.INCOME:
            return self.get_income_categories()
        if kind is TransactionType.EXPENSE:
            return self.get_expense_categories()
        return self.get_all_categories()
