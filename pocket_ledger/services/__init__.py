"""Services package."""

from pocket_ledger.services.finance import FinanceService
from pocket_ledger.services.notification import NotificationService

__all__ = [
    "FinanceService",
    "NotificationService",
]
