"""Telegram implementation of the NotificationChannel protocol."""

from __future__ import annotations

import logging

import telegram

from src.notifications.channels import Severity

logger = logging.getLogger(__name__)

_ICONS: dict[Severity, str] = {
    Severity.INFO: "ℹ️",
    Severity.SUCCESS: "✅",
    Severity.WARNING: "⚠️",
    Severity.ERROR: "❌",
}


def format_notice(title: str, message: str, severity: Severity) -> str:
    """Render a notice as a one-line Markdown message."""
    return f"{_ICONS[severity]} *{title}*: {message}"


class TelegramChannel:
    """Sends notices to a single Telegram chat via the Bot API."""

    def __init__(self, bot: telegram.Bot, chat_id: int) -> None:
        self._bot = bot
        self._chat_id = chat_id

    @property
    def name(self) -> str:
        return "telegram"

    async def notify(self, title: str, message: str, severity: Severity) -> bool:
        """Send the notice to the configured chat."""
        try:
            await self._bot.send_message(
                chat_id=self._chat_id,
                text=format_notice(title, message, severity),
                parse_mode="Markdown",
            )
            return True
        except Exception:
            logger.exception("TelegramChannel.notify failed for chat_id=%s", self._chat_id)
            return False
