"""Telegram application factory."""

from __future__ import annotations

import logging

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from src.bot.handlers import handle_clear, handle_message, handle_start, handle_status
from src.bot.security import owner_id
from src.config import settings
from src.notifications.log_channel import LogChannel
from src.notifications.router import NotificationRouter
from src.notifications.telegram_channel import TelegramChannel

logger = logging.getLogger(__name__)


def _init_notifications(app: Application) -> None:
    """Register notification channels and set the default."""
    router = NotificationRouter.get()
    router.register_channel(LogChannel())

    # Single-user bot: notices go to the owner's private chat.
    owner = owner_id()
    if owner is not None:
        router.register_channel(TelegramChannel(app.bot, owner))

    default = settings.default_notification_channel
    if router.get_channel(default) is None:
        logger.warning("Notification channel '%s' unavailable, using 'log'", default)
        default = "log"
    router.set_default_channel(default)
    logger.info(
        "Notifications initialized: channels=%s, default=%s",
        router.list_channels(),
        router.default_channel_name,
    )


def create_app() -> Application:
    """Build and configure the Telegram application."""
    app = Application.builder().token(settings.telegram_bot_token).concurrent_updates(True).build()

    _init_notifications(app)

    app.add_handler(CommandHandler("start", handle_start))
    app.add_handler(CommandHandler("clear", handle_clear))
    app.add_handler(CommandHandler("status", handle_status))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    return app
