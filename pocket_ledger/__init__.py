"""
Pocket Ledger - Source Package

A personal finance ledger for the console: income and expenses recorded
against free-form categories, a running balance, and per-category budgets.

DESIGN PRINCIPLES:
1. The wallet is the single source of truth
2. Money is Decimal, never float
3. Balance is a hard floor, budgets are advice
4. Reports never mutate
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
