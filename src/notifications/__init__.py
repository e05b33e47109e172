"""Notification channel abstraction layer."""

from src.notifications.channels import NotificationChannel, Severity
from src.notifications.log_channel import LogChannel
from src.notifications.router import NotificationRouter
from src.notifications.telegram_channel import TelegramChannel

__all__ = [
    "LogChannel",
    "NotificationChannel",
    "NotificationRouter",
    "Severity",
    "TelegramChannel",
]
