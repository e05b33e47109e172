"""Telegram handlers that drive and render the conversation controller."""

import contextlib
import logging

from telegram import Update
from telegram.constants import ChatAction
from telegram.ext import ContextTypes

from src.bot.security import is_allowed
from src.bot.session import get_controller
from src.chat.models import Message
from src.config import settings
from src.notifications.router import NotificationRouter

logger = logging.getLogger(__name__)

BUSY_REPLY = "Still working on your last message..."


def render_message(message: Message) -> str:
    """Text shown in the chat for a conversation entry."""
    if message.is_error:
        return f"⚠️ {message.content}"
    return message.content


async def handle_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start — begin a new conversation with the greeting."""
    if not is_allowed(update):
        return

    controller = get_controller()
    controller.initialize()
    await update.message.reply_text(render_message(controller.greeting))


async def handle_clear(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /clear — reset conversation history."""
    if not is_allowed(update):
        return

    controller = get_controller()
    discarded = len(controller.messages) - 1
    controller.reset()
    await update.message.reply_text(
        f"Cleared {discarded} messages. Starting fresh.\n\n{render_message(controller.greeting)}"
    )


async def handle_status(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /status — show session info."""
    if not is_allowed(update):
        return

    controller = get_controller()
    lines = [
        "**Chat Status**",
        f"Model: {settings.claude_model}",
        f"Messages: {len(controller.messages)}",
        f"Context window: {len(controller.context_window())}/{controller.window_size}",
        f"Request in flight: {'yes' if controller.request_in_flight else 'no'}",
        f"Input: {controller.submit_label}",
        f"Notices: {NotificationRouter.get().default_channel_name or 'none'}",
    ]
    await update.message.reply_text("\n".join(lines), parse_mode="Markdown")


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Submit an incoming text message and reply with the outcome."""
    if not is_allowed(update):
        return

    user_message = update.message.text or ""
    logger.info("Message from %s: %s", update.effective_chat.id, user_message[:80])

    with contextlib.suppress(Exception):
        await context.bot.send_chat_action(
            chat_id=update.effective_chat.id, action=ChatAction.TYPING
        )

    controller = get_controller()
    # No await between the lock check and submit(), so the draft can't be
    # overwritten by a concurrent update.
    if controller.is_input_locked:
        await update.message.reply_text(BUSY_REPLY)
        return

    controller.update_draft(user_message)
    submitted = await controller.submit()
    if submitted is None:
        return

    outcome = controller.reply_to(submitted)
    if outcome is None:
        logger.info("Conversation was reset before the reply arrived; not replying")
        return
    await update.message.reply_text(render_message(outcome))
