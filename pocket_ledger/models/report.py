"""
Report Models

Aggregates computed from a wallet, kept apart from their text rendering
(see pocket_ledger.services.formatting) so the numbers can be tested
exactly.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CategoryBudgetStatus(BaseModel):
    """Budget consumption for one category."""
    model_config = ConfigDict(frozen=True)

    category: str
    budget: Decimal = Field(..., description="Limit, zero when none is set")
    spent: Decimal = Field(..., description="Total expenses in the category")
    remaining: Decimal = Field(..., description="budget - spent, may be negative")

    @property
    def is_overspent(self) -> bool:
        return self.remaining < 0


class CategoryNotFound(BaseModel):
    """
    Result of a category-scoped query for a category the wallet has
    never seen: no budget entry and no transactions.

    This is a successful result, not an error.
    """
    model_config = ConfigDict(frozen=True)

    category: str


class FinanceSummary(BaseModel):
    """Balance plus income and expense totals."""
    model_config = ConfigDict(frozen=True)

    balance: Decimal
    total_income: Decimal
    total_expense: Decimal
