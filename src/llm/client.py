"""Async Claude API client used as the conversation's completion service."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from src.chat.controller import CompletionError
from src.config import settings

logger = logging.getLogger(__name__)

_client: anthropic.AsyncAnthropic | None = None


def _get_client() -> anthropic.AsyncAnthropic:
    """Lazily initialize the Anthropic client."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = anthropic.AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        )
    return _client


async def complete_text(
    messages: list[dict[str, Any]],
    *,
    system: str | list[dict[str, Any]] | None = None,
    model: str | None = None,
    max_tokens: int | None = None,
) -> str:
    """Single-shot Claude call — no tools, no streaming.

    Returns the concatenated text blocks of the reply.
    """
    client = _get_client()
    kwargs: dict[str, Any] = {
        "model": model or settings.claude_model,
        "max_tokens": max_tokens or settings.max_tokens,
        "messages": messages,
    }
    if system is not None:
        kwargs["system"] = system
    response = await client.messages.create(**kwargs)
    return "".join(block.text for block in response.content if block.type == "text")


def build_messages(message: str, conversation_history: list[dict[str, str]]) -> list[dict[str, str]]:
    """Turn a context window plus the new prompt into Messages API input.

    The API wants a user turn first, so leading assistant entries are
    dropped. The prompt is appended unless the history already ends with it.
    """
    messages = [{"role": m["role"], "content": m["content"]} for m in conversation_history]
    while messages and messages[0]["role"] != "user":
        messages.pop(0)
    if not messages or messages[-1] != {"role": "user", "content": message}:
        messages.append({"role": "user", "content": message})
    return messages


async def send_message(message: str, conversation_history: list[dict[str, str]]) -> str:
    """Completion service: reply to ``message`` given the recent conversation.

    Raises:
        CompletionError: Claude returned no text.
        anthropic.APIError: the request itself failed.
    """
    messages = build_messages(message, conversation_history)
    logger.debug("Calling %s with %d messages", settings.claude_model, len(messages))
    text = await complete_text(messages, system=settings.system_prompt or None)
    if not text.strip():
        msg = "Claude returned an empty response"
        raise CompletionError(msg)
    return text
