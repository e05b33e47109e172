"""Claude completion service."""

from src.llm.client import build_messages, complete_text, send_message

__all__ = ["build_messages", "complete_text", "send_message"]
