"""
Finance Service

The report builder over a user's wallet.

Two layers:
1. Aggregates (summary, budget_statuses, category_budget_status, ...)
   return report models with exact Decimal values.
2. Text reports (get_overview, get_budget, ...) render those aggregates
   through pocket_ledger.services.formatting.

Mutations are passed straight to the wallet. Every other method is
read-only; the service holds no ledger state of its own.
"""

from decimal import Decimal
from typing import Optional, Union

from pocket_ledger.models.report import (
    CategoryBudgetStatus,
    CategoryNotFound,
    FinanceSummary,
)
from pocket_ledger.models.transaction import Transaction, TransactionType
from pocket_ledger.models.user import User
from pocket_ledger.models.wallet import Amount
from pocket_ledger.services import formatting


class FinanceService:
    """
    Income, expenses, budgets and reports for a given user.

    The user is always passed in explicitly; the service never tracks
    who is logged in.
    """

    def __init__(
        self,
        enforce_budget_limits: bool = False,
        timestamp_format: str = formatting.DEFAULT_TIMESTAMP_FORMAT,
    ):
        """
        Args:
            enforce_budget_limits: Reject expenses that overrun an explicit
                category budget instead of only logging them.
            timestamp_format: strftime format for transaction lines.
        """
        self._enforce_budget_limits = enforce_budget_limits
        self._timestamp_format = timestamp_format

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_income(self, user: User, amount: Amount, category: str) -> Transaction:
        return user.wallet.add_income(amount, category)

    def add_expense(self, user: User, amount: Amount, category: str) -> Transaction:
        """
        Raises:
            InsufficientFundsError: amount is larger than the balance
            BudgetExceededError: only with enforce_budget_limits
        """
        return user.wallet.add_expense(
            amount, category, enforce_budget=self._enforce_budget_limits
        )

    def set_budget(self, user: User, category: str, amount: Amount) -> None:
        user.wallet.set_budget(category, amount)

    # =========================================================================
    # Aggregates
    # =========================================================================

    def total_by_type(self, user: User, kind: TransactionType) -> Decimal:
        """Sum of all transactions of one kind."""
        return user.wallet.total_by_type(kind)

    def summary(self, user: User) -> FinanceSummary:
        wallet = user.wallet
        return FinanceSummary(
            balance=wallet.balance,
            total_income=wallet.total_by_type(TransactionType.INCOME),
            total_expense=wallet.total_by_type(TransactionType.EXPENSE),
        )

    def _status(self, user: User, category: str) -> CategoryBudgetStatus:
        wallet = user.wallet
        budget = wallet.get_budget(category)
        spent = wallet.get_budget_spent(category)
        return CategoryBudgetStatus(
            category=category,
            budget=budget,
            spent=spent,
            remaining=budget - spent,
        )

    def budget_statuses(
        self,
        user: User,
        kind: Optional[TransactionType] = None,
    ) -> list[CategoryBudgetStatus]:
        """
        Budget status for every category, sorted by name.

        With `kind`, only income or only expense categories are listed.
        """
        categories = user.wallet.categories_for(kind)
        return [self._status(user, category) for category in sorted(categories)]

    def category_budget_status(
        self,
        user: User,
        category: str,
    ) -> Union[CategoryBudgetStatus, CategoryNotFound]:
        """
        Budget status for one category.

        Returns CategoryNotFound when the category has neither a budget nor
        any transactions, rather than a zeroed status.
        """
        if not user.wallet.has_category(category):
            return CategoryNotFound(category=category)
        return self._status(user, category)

    # =========================================================================
    # Text reports
    # =========================================================================

    def get_balance(self, user: User) -> str:
        return formatting.format_balance(user.wallet.balance)

    def get_summary(self, user: User) -> str:
        return formatting.format_summary(self.summary(user))

    def get_budget(self, user: User, kind: Optional[TransactionType] = None) -> str:
        return formatting.format_budget_overview(self.budget_statuses(user, kind), kind)

    def get_transactions(self, user: User) -> str:
        return formatting.format_transactions(
            user.wallet.get_transactions(), self._timestamp_format
        )

    def get_overview(self, user: User) -> str:
        """Balance, income/expense summary, all budgets and all transactions."""
        return formatting.format_overview(
            self.get_balance(user),
            self.get_summary(user),
            self.get_budget(user),
            self.get_transactions(user),
        )

    def get_category_budget(self, user: User, category: str) -> str:
        result = self.category_budget_status(user, category)
        if isinstance(result, CategoryNotFound):
            return formatting.format_category_not_found(result)
        return formatting.format_category_budget(result)

    def get_category_transactions(self, user: User, category: str) -> str:
        wallet = user.wallet
        if not wallet.has_category(category):
            return formatting.format_category_not_found(CategoryNotFound(category=category))
        return formatting.format_category_transactions(
            category,
            wallet.get_transactions_by_category(category),
            self._timestamp_format,
        )
