"""
Report Formatting

Turns computed aggregates into the text blocks the console prints.
Everything here is a pure function of its arguments: no wallet access,
no clock, no I/O.
"""

from decimal import Decimal
from typing import Optional, Sequence

from pocket_ledger.models.report import (
    CategoryBudgetStatus,
    CategoryNotFound,
    FinanceSummary,
)
from pocket_ledger.models.transaction import Transaction, TransactionType

DEFAULT_TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

OVERVIEW_SEPARATOR = "---------------"

_BUDGET_HEADERS = {
    None: "Budget by category:",
    TransactionType.INCOME: "Budget by income category:",
    TransactionType.EXPENSE: "Budget by expense category:",
}


def format_balance(balance: Decimal) -> str:
    return f"Current balance: {balance}"


def format_summary(summary: FinanceSummary) -> str:
    return (
        f"Total income: {summary.total_income}\n"
        f"Total expenses: {summary.total_expense}"
    )


def format_budget_overview(
    statuses: Sequence[CategoryBudgetStatus],
    kind: Optional[TransactionType] = None,
) -> str:
    """Budget, spent and remaining for each category, in the given order."""
    if not statuses:
        return "No categories available for budget."

    header = _BUDGET_HEADERS[kind]
    lines = [header, "-" * 26]
    for status in statuses:
        lines.extend([
            f"Category: {status.category}",
            "----------",
            f"Budget: {status.budget}, spent: {status.spent}",
            f"Remaining budget: {status.remaining}",
        ])
    return "\n".join(lines)


def format_category_not_found(result: CategoryNotFound) -> str:
    return f'Category "{result.category}" not found.'


def format_category_budget(status: CategoryBudgetStatus) -> str:
    return "\n".join([
        f"Budget for category: {status.category}",
        "-" * 21,
        f"Budget: {status.budget}, spent: {status.spent}",
        f"Remaining budget: {status.remaining}",
    ])


def format_transaction(
    transaction: Transaction,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    with_category: bool = True,
) -> str:
    line = (
        f"{transaction.timestamp.strftime(timestamp_format)} - "
        f"{transaction.kind.label}: {transaction.amount}"
    )
    if with_category:
        line += f" (Category: {transaction.category})"
    return line


def format_transactions(
    transactions: Sequence[Transaction],
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> str:
    if not transactions:
        return "No transactions found."

    lines = ["All transactions:", "-" * 21]
    lines.extend(format_transaction(t, timestamp_format) for t in transactions)
    return "\n".join(lines)


def format_category_transactions(
    category: str,
    transactions: Sequence[Transaction],
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> str:
    if not transactions:
        return f'No transactions for category "{category}".'

    lines = [f"Transactions for category: {category}", "-" * 25]
    lines.extend(
        format_transaction(t, timestamp_format, with_category=False)
        for t in transactions
    )
    return "\n".join(lines)


def format_overview(balance: str, summary: str, budget: str, transactions: str) -> str:
    """Join the four overview sections with the fixed separators."""
    return f"{balance}\n{OVERVIEW_SEPARATOR}\n{summary}\n\n{budget}\n\n{transactions}"
