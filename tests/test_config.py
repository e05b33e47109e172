"""Tests for Settings configuration model."""

import pytest
from pydantic import ValidationError

from src.config import DEFAULT_WELCOME, Settings


class TestGetAllowedUserIds:
    def test_parses_comma_separated(self):
        s = Settings(allowed_user_ids="123,456,789")
        assert s.get_allowed_user_ids() == {123, 456, 789}

    def test_handles_spaces(self):
        s = Settings(allowed_user_ids=" 123 , 456 ")
        assert s.get_allowed_user_ids() == {123, 456}

    def test_empty_string_returns_empty_set(self):
        s = Settings(allowed_user_ids="")
        assert s.get_allowed_user_ids() == set()

    def test_single_id(self):
        s = Settings(allowed_user_ids="42")
        assert s.get_allowed_user_ids() == {42}


class TestDefaults:
    def test_context_window_size(self):
        assert Settings().context_window_size == 10

    def test_welcome_message(self):
        s = Settings()
        assert s.welcome_message == DEFAULT_WELCOME
        assert s.welcome_message.startswith("Hello! I'm Claude")

    def test_labels(self):
        s = Settings()
        assert s.idle_label == "Send"
        assert s.busy_label == "Sending..."

    def test_panel_height(self):
        assert Settings().panel_height == 600

    def test_model_and_tokens(self):
        s = Settings()
        assert s.claude_model == "claude-sonnet-4-5-20250929"
        assert s.max_tokens == 4096

    def test_notification_channel(self):
        assert Settings().default_notification_channel == "log"


class TestValidation:
    def test_window_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(context_window_size=0)

    def test_empty_welcome_rejected(self):
        with pytest.raises(ValidationError):
            Settings(welcome_message="")


class TestExtraForbidden:
    def test_unknown_env_var_raises(self):
        with pytest.raises(ValueError, match="extra_forbidden"):
            Settings(**{"nonexistent_field": "value"})
