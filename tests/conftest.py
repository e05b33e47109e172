"""Shared test fixtures."""

import pytest

from src.bot import security, session
from src.notifications.router import NotificationRouter


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Start every test with a fresh router, session and allowlist cache."""
    NotificationRouter._reset()
    session._reset()
    security._reset()
    yield
    NotificationRouter._reset()
    session._reset()
    security._reset()
