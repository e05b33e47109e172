"""Owner allowlist gate for the single-user bot."""

import logging

from telegram import Update

from src.config import settings

logger = logging.getLogger(__name__)

_allowed: set[int] | None = None


def _get_allowed() -> set[int]:
    """Lazily load and cache the allowed user IDs."""
    global _allowed  # noqa: PLW0603
    if _allowed is None:
        _allowed = settings.get_allowed_user_ids()
    return _allowed


def _reset() -> None:
    """Forget the cached allowlist — for tests only."""
    global _allowed  # noqa: PLW0603
    _allowed = None


def owner_id() -> int | None:
    """The chat owner: lowest allowed user ID, or None when nobody is allowed."""
    allowed = _get_allowed()
    return min(allowed) if allowed else None


def is_allowed(update: Update) -> bool:
    """Check if the update comes from an allowed user.

    Unknown users and updates without a user are silently rejected.
    """
    user = update.effective_user
    if user is None or update.message is None:
        return False

    allowed = _get_allowed()
    if not allowed:
        logger.warning("ALLOWED_USER_IDS is empty — rejecting all messages")
        return False

    if user.id not in allowed:
        logger.info("Ignoring message from unknown user %s", user.id)
        return False
    return True
