"""Tests for the Telegram application factory."""

from unittest.mock import MagicMock, patch

from src.config import Settings
from src.notifications.router import NotificationRouter


def _create(owner: int | None, default_channel: str = "telegram") -> MagicMock:
    with (
        patch("src.bot.app.Application") as mock_app_cls,
        patch("src.bot.app.owner_id", return_value=owner),
        patch("src.bot.app.settings", Settings(default_notification_channel=default_channel)),
    ):
        from src.bot.app import create_app

        app = create_app()
        built = (
            mock_app_cls.builder.return_value.token.return_value
            .concurrent_updates.return_value.build.return_value
        )
        assert app is built
    return app


def test_registers_handlers() -> None:
    app = _create(owner=42)
    assert app.add_handler.call_count == 4


def test_owner_gets_telegram_notifications() -> None:
    _create(owner=42)
    router = NotificationRouter.get()
    assert router.list_channels() == ["log", "telegram"]
    assert router.default_channel_name == "telegram"


def test_falls_back_to_log_without_owner() -> None:
    _create(owner=None)
    router = NotificationRouter.get()
    assert router.list_channels() == ["log"]
    assert router.default_channel_name == "log"


def test_log_channel_can_be_default() -> None:
    _create(owner=42, default_channel="log")
    assert NotificationRouter.get().default_channel_name == "log"


def test_default_settings_keep_notices_out_of_owner_chat() -> None:
    with (
        patch("src.bot.app.Application"),
        patch("src.bot.app.owner_id", return_value=42),
        patch("src.bot.app.settings", Settings()),
    ):
        from src.bot.app import create_app

        create_app()

    router = NotificationRouter.get()
    assert router.list_channels() == ["log", "telegram"]
    assert router.default_channel_name == "log"
