"""Message and Role data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class Role(StrEnum):
    """Who authored a message. Values match the Messages API ``role`` field."""

    USER = "user"
    ASSISTANT = "assistant"


def display_time() -> str:
    """Wall-clock time for display, e.g. ``"14:05:09"``."""
    return datetime.now().strftime("%H:%M:%S")


@dataclass(frozen=True)
class Message:
    """A single conversation entry.

    Attributes:
        id: Unique within a conversation: millisecond timestamp plus a role
            suffix (``_user``, ``_assistant``, ``_error``, ``_welcome``).
        content: Text body. Never empty once stored in history.
        role: ``Role.USER`` or ``Role.ASSISTANT``.
        is_error: True for a locally synthesized failure notice.
        timestamp: Display-only creation time; list order is authoritative.
    """

    id: str
    content: str
    role: Role
    is_error: bool = False
    timestamp: str = field(default_factory=display_time)

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER

    def to_api_message(self) -> dict[str, str]:
        """Format as a ``{role, content}`` pair for the backend."""
        return {"role": self.role.value, "content": self.content}
