"""
Notification Service

Pushes short notices (budget overruns and the like) to the user.
"""

from typing import Callable, Optional

import structlog
import typer


class NotificationService:
    """Writes notices to a sink callable, `typer.echo` by default."""

    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self._sink = sink or typer.echo
        self._logger = structlog.get_logger(__name__)

    def notify(self, message: str) -> None:
        self._sink(f"Notification: {message}")
        self._logger.info("notification_sent", message=message)
