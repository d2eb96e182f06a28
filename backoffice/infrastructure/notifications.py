"""
Logging-backed notifier, used when no interactive surface is attached.
"""

import logging

from backoffice.application.notifications import Notifier


logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Routes user notifications to the module log."""

    def success(self, message: str) -> None:
        logger.info(f"[success] {message}")

    def error(self, message: str) -> None:
        logger.warning(f"[error] {message}")

    def info(self, message: str) -> None:
        logger.info(f"[info] {message}")
