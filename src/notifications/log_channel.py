"""Notification channel that writes notices to the application log."""

from __future__ import annotations

import logging

from src.notifications.channels import Severity

logger = logging.getLogger(__name__)

_LEVELS: dict[Severity, int] = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class LogChannel:
    """Always-available fallback channel; never fails."""

    @property
    def name(self) -> str:
        return "log"

    async def notify(self, title: str, message: str, severity: Severity) -> bool:
        logger.log(_LEVELS[severity], "[%s] %s: %s", severity.value, title, message)
        return True
