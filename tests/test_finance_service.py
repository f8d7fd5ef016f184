"""
Tests for FinanceService

Aggregates are checked as exact Decimals; text reports are checked
against golden strings with a pinned clock.
"""

from decimal import Decimal

import pytest

from pocket_ledger.models import (
    CategoryBudgetStatus,
    CategoryNotFound,
    FinanceSummary,
    InsufficientFundsError,
    BudgetExceededError,
    TransactionType,
)
from pocket_ledger.services import FinanceService


class TestMutations:
    """Mutations pass straight through to the wallet."""

    def test_add_income_and_expense(self, finance, user):
        """Test income and expense update the user's wallet."""
        finance.add_income(user, Decimal("1000"), "Salary")
        transaction = finance.add_expense(user, Decimal("200"), "Food")

        assert user.wallet.balance == Decimal("800")
        assert transaction.kind is TransactionType.EXPENSE

    def test_insufficient_funds_propagates(self, finance, user):
        """Test the wallet's error reaches the caller untouched."""
        finance.add_income(user, Decimal("800"), "Salary")
        with pytest.raises(InsufficientFundsError):
            finance.add_expense(user, Decimal("900"), "Rent")
        assert user.wallet.balance == Decimal("800")
        assert len(user.wallet.get_transactions()) == 1

    def test_set_budget(self, finance, user):
        """Test budgets are stored on the wallet."""
        finance.set_budget(user, "Food", Decimal("150"))
        assert user.wallet.get_budget("Food") == Decimal("150")

    def test_enforced_budget_limits(self, user):
        """Test the service forwards hard budget enforcement."""
        strict = FinanceService(enforce_budget_limits=True)
        strict.add_income(user, Decimal("1000"), "Salary")
        strict.set_budget(user, "Food", Decimal("100"))
        with pytest.raises(BudgetExceededError):
            strict.add_expense(user, Decimal("101"), "Food")


class TestAggregates:
    """Exact aggregate values."""

    def test_total_by_type(self, finance, funded_user):
        """Test income and expense totals."""
        assert finance.total_by_type(funded_user, TransactionType.INCOME) == Decimal("1000")
        assert finance.total_by_type(funded_user, TransactionType.EXPENSE) == Decimal("200")

    def test_summary(self, finance, funded_user):
        """Test the balance summary."""
        assert finance.summary(funded_user) == FinanceSummary(
            balance=Decimal("800"),
            total_income=Decimal("1000"),
            total_expense=Decimal("200"),
        )

    def test_budget_statuses_sorted(self, finance, funded_user):
        """Test one status per category, in name order."""
        funded_user.wallet.set_budget("Clothes", Decimal("80"))
        statuses = finance.budget_statuses(funded_user)

        assert [s.category for s in statuses] == ["Clothes", "Food", "Salary"]
        food = statuses[1]
        assert food.budget == Decimal("150")
        assert food.spent == Decimal("200")
        assert food.remaining == Decimal("-50")
        assert food.is_overspent

    def test_budget_statuses_scoped(self, finance, funded_user):
        """Test income-only and expense-only listings."""
        funded_user.wallet.set_budget("Travel", Decimal("300"))

        income = finance.budget_statuses(funded_user, TransactionType.INCOME)
        expense = finance.budget_statuses(funded_user, TransactionType.EXPENSE)

        assert [s.category for s in income] == ["Salary"]
        assert [s.category for s in expense] == ["Food", "Travel"]

    def test_remain_equals_budget_minus_spent(self, finance, funded_user):
        """Test remaining == budget - spent for every category."""
        funded_user.wallet.set_budget("Travel", Decimal("300"))
        for status in finance.budget_statuses(funded_user):
            assert status.remaining == status.budget - status.spent

    def test_category_budget_status_found(self, finance, funded_user):
        """Test the status of a known category."""
        result = finance.category_budget_status(funded_user, "Food")
        assert result == CategoryBudgetStatus(
            category="Food",
            budget=Decimal("150"),
            spent=Decimal("200"),
            remaining=Decimal("-50"),
        )

    def test_category_budget_status_not_found(self, finance, funded_user):
        """Test an unseen category is reported as not found, not zeroed."""
        result = finance.category_budget_status(funded_user, "Travel")
        assert result == CategoryNotFound(category="Travel")

    def test_zero_budget_category_is_found(self, finance, user):
        """Test an explicit zero budget still counts as a known category."""
        finance.set_budget(user, "Travel", Decimal("0"))
        result = finance.category_budget_status(user, "Travel")
        assert isinstance(result, CategoryBudgetStatus)
        assert result.remaining == Decimal("0")

    def test_reports_do_not_mutate(self, finance, funded_user):
        """Test that reading reports leaves the wallet untouched."""
        before = funded_user.wallet.model_dump()
        finance.get_overview(funded_user)
        finance.get_category_budget(funded_user, "Nope")
        finance.get_category_transactions(funded_user, "Nope")
        assert funded_user.wallet.model_dump() == before


class TestTextReports:
    """Golden comparisons for the rendered reports."""

    def test_balance(self, finance, funded_user):
        assert finance.get_balance(funded_user) == "Current balance: 800"

    def test_summary(self, finance, funded_user):
        assert finance.get_summary(funded_user) == (
            "Total income: 1000\n"
            "Total expenses: 200"
        )

    def test_budget_overview(self, finance, funded_user):
        """Test the all-categories budget report."""
        assert finance.get_budget(funded_user) == (
            "Budget by category:\n"
            "--------------------------\n"
            "Category: Food\n"
            "----------\n"
            "Budget: 150, spent: 200\n"
            "Remaining budget: -50\n"
            "Category: Salary\n"
            "----------\n"
            "Budget: 0, spent: 0\n"
            "Remaining budget: 0"
        )

    def test_expense_budget_overview(self, finance, funded_user):
        """Test the expense-scoped budget report."""
        assert finance.get_budget(funded_user, TransactionType.EXPENSE) == (
            "Budget by expense category:\n"
            "--------------------------\n"
            "Category: Food\n"
            "----------\n"
            "Budget: 150, spent: 200\n"
            "Remaining budget: -50"
        )

    def test_budget_overview_empty(self, finance, user):
        """Test the message for a wallet with no categories."""
        assert finance.get_budget(user) == "No categories available for budget."

    def test_transactions(self, finance, funded_user):
        """Test the full transaction list."""
        assert finance.get_transactions(funded_user) == (
            "All transactions:\n"
            "---------------------\n"
            "2024/12/01 10:00:00 - Income: 1000 (Category: Salary)\n"
            "2024/12/01 10:01:00 - Expense: 200 (Category: Food)"
        )

    def test_transactions_empty(self, finance, user):
        assert finance.get_transactions(user) == "No transactions found."

    def test_custom_timestamp_format(self, funded_user):
        """Test the timestamp format is configurable."""
        service = FinanceService(timestamp_format="%d.%m.%Y")
        assert "01.12.2024 - Income: 1000" in service.get_transactions(funded_user)

    def test_overview(self, finance, funded_user):
        """Test the overview joins all sections with fixed separators."""
        overview = finance.get_overview(funded_user)
        expected = "\n".join([
            "Current balance: 800",
            "---------------",
            "Total income: 1000",
            "Total expenses: 200",
            "",
            finance.get_budget(funded_user),
            "",
            finance.get_transactions(funded_user),
        ])
        assert overview == expected

    def test_category_budget(self, finance, funded_user):
        assert finance.get_category_budget(funded_user, "Food") == (
            "Budget for category: Food\n"
            "---------------------\n"
            "Budget: 150, spent: 200\n"
            "Remaining budget: -50"
        )

    def test_category_budget_not_found(self, finance, funded_user):
        assert finance.get_category_budget(funded_user, "Travel") == (
            'Category "Travel" not found.'
        )

    def test_category_transactions(self, finance, funded_user):
        assert finance.get_category_transactions(funded_user, "Food") == (
            "Transactions for category: Food\n"
            "-------------------------\n"
            "2024/12/01 10:01:00 - Expense: 200"
        )

    def test_category_transactions_not_found(self, finance, funded_user):
        assert finance.get_category_transactions(funded_user, "food") == (
            'Category "food" not found.'
        )

    def test_category_transactions_budget_only(self, finance, funded_user):
        """Test a budgeted category without transactions."""
        funded_user.wallet.set_budget("Travel", Decimal("300"))
        assert finance.get_category_transactions(funded_user, "Travel") == (
            'No transactions for category "Travel".'
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
