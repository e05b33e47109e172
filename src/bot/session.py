"""The bot's single conversation session."""

import logging

from src.chat.controller import ConversationController
from src.llm.client import send_message
from src.notifications.router import NotificationRouter

logger = logging.getLogger(__name__)

_controller: ConversationController | None = None


def get_controller() -> ConversationController:
    """Get or create the owner's conversation controller."""
    global _controller  # noqa: PLW0603
    if _controller is None:
        _controller = ConversationController(send_message, NotificationRouter.get())
        logger.info("Conversation session started (window=%d)", _controller.window_size)
    return _controller


def _reset() -> None:
    """Drop the session — for tests only."""
    global _controller  # noqa: PLW0603
    _controller = None
