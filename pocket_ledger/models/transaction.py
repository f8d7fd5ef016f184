"""
Transaction Model

A transaction is one financial event: money coming in or going out,
filed under a category.

DESIGN DECISION: Transactions are frozen pydantic models.
Once recorded they are never edited; the wallet history is append-only.
Categories are kept verbatim (no trimming, no case folding) so that
"Food" and "food" stay two different categories.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Human-readable label used in reports."""
        return "Income" if self is TransactionType.INCOME else "Expense"


class Transaction(BaseModel):
    """
    A single recorded income or expense.

    Only the wallet creates these (see Wallet.add_income / add_expense).
    """
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Transaction amount (always positive, direction is in kind)"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the transaction was recorded"
    )
    kind: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Free-form category label"
    )

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign of its effect on the balance."""
        return self.amount if self.kind is TransactionType.INCOME else -self.amount
