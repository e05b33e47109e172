"""Conversation state machine for a single chat session."""

from src.chat.controller import (
    ERROR_NOTICE,
    NOTIFY_MESSAGE,
    NOTIFY_SEVERITY,
    NOTIFY_TITLE,
    CompletionError,
    ConversationController,
)
from src.chat.models import Message, Role

__all__ = [
    "ERROR_NOTICE",
    "NOTIFY_MESSAGE",
    "NOTIFY_SEVERITY",
    "NOTIFY_TITLE",
    "CompletionError",
    "ConversationController",
    "Message",
    "Role",
]
