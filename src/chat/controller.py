"""Conversation controller: message log, turn-taking, and request lifecycle."""

from __future__ import annotations

import inspect
import logging
import time
from typing import TYPE_CHECKING, Protocol

from src.chat.models import Message, Role
from src.config import settings
from src.notifications.channels import Severity

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    CompletionService = Callable[[str, list[dict[str, str]]], Awaitable[str] | str]
    Subscriber = Callable[["ConversationController"], None]

logger = logging.getLogger(__name__)

ERROR_NOTICE = "Sorry, I encountered an error processing your request. Please try again."

NOTIFY_TITLE = "Error"
NOTIFY_MESSAGE = "Failed to send message to Claude"
NOTIFY_SEVERITY = Severity.ERROR


class CompletionError(Exception):
    """The completion service produced no usable reply."""


class Notifier(Protocol):
    """Anything that can surface a titled, severity-tagged notice to the user."""

    def notify(self, title: str, message: str, severity: Severity) -> Awaitable[bool] | None:
        """Fire-and-forget. Async notifiers return an awaitable delivery result."""
        ...


class ConversationController:
    """Owns one chat session's state and drives each request to completion.

    State is exposed read-only (``messages``, ``pending_input_text``,
    ``request_in_flight`` plus the derived ``is_input_locked`` and
    ``submit_label``). Presentation layers either poll it or register a
    callback with ``subscribe()``, which fires after every mutation.
    """

    def __init__(
        self,
        completion_service: CompletionService,
        notifier: Notifier | None = None,
        *,
        window_size: int | None = None,
        welcome_message: str | None = None,
        idle_label: str | None = None,
        busy_label: str | None = None,
        height: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.window_size = settings.context_window_size if window_size is None else window_size
        if self.window_size < 1:
            msg = f"window_size must be at least 1, got {self.window_size}"
            raise ValueError(msg)
        self.welcome_message = welcome_message or settings.welcome_message
        self.idle_label = idle_label or settings.idle_label
        self.busy_label = busy_label or settings.busy_label
        # Layout only; the controller never reads it.
        self.height = settings.panel_height if height is None else height

        self._complete = completion_service
        self._notifier = notifier
        self._clock = clock
        self._subscribers: list[Subscriber] = []
        self._last_stamp = 0
        # Bumped on every reset so replies to a discarded conversation are dropped.
        self._generation = 0

        self._messages: list[Message] = []
        self._greeting_id = ""
        self._draft = ""
        self._in_flight = False
        self.initialize()

    # -- Read-only views -------------------------------------------------------

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def greeting(self) -> Message:
        return self._messages[0]

    @property
    def pending_input_text(self) -> str:
        return self._draft

    @property
    def request_in_flight(self) -> bool:
        return self._in_flight

    @property
    def is_input_locked(self) -> bool:
        return self._in_flight

    @property
    def submit_label(self) -> str:
        return self.busy_label if self._in_flight else self.idle_label

    # -- Observers -------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a state-change callback. Returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                logger.exception("State subscriber %r failed", callback)

    # -- Operations ------------------------------------------------------------

    def initialize(self) -> None:
        """Start a fresh conversation holding only the greeting."""
        self._generation += 1
        greeting = Message(
            id=f"{self._next_stamp()}_welcome",
            content=self.welcome_message,
            role=Role.ASSISTANT,
        )
        self._greeting_id = greeting.id
        self._messages = [greeting]
        self._draft = ""
        self._in_flight = False
        self._emit()

    def reset(self) -> None:
        """Discard the conversation and restore the initial state."""
        logger.info("Resetting conversation (%d messages discarded)", len(self._messages))
        self.initialize()

    clear_chat = reset

    def update_draft(self, text: str) -> None:
        self._draft = text
        self._emit()

    async def handle_key_press(self, key: str, *, shift: bool = False) -> bool:
        """Submit on Enter; Shift+Enter and every other key are left to the input."""
        if key != "Enter" or shift:
            return False
        await self.submit()
        return True

    async def submit(self) -> Message | None:
        """Send the draft and record the reply.

        Returns None without touching any state when the draft is blank or
        a request is already in flight. Otherwise the user message is
        appended, the completion service is awaited, and either its reply or
        an error notice is appended; the user message is returned so callers
        can look up its outcome with ``reply_to()``. Failures never propagate.

        The in-flight flag is released before the notifier runs, so a slow
        notice never blocks the next submission.
        """
        text = self._draft.strip()
        if not text:
            logger.debug("Ignoring empty submission")
            return None
        if self._in_flight:
            logger.debug("Ignoring submission while a request is in flight")
            return None

        base = self._next_stamp()
        generation = self._generation
        submitted = Message(id=f"{base}_user", content=text, role=Role.USER)
        self._messages.append(submitted)
        self._draft = ""
        self._in_flight = True
        self._emit()

        history = self.context_window()
        logger.info("Sending message (%d context entries): %s", len(history), text[:80])

        failed = False
        try:
            reply = await self._request(text, history)
        except Exception:
            logger.exception("Error sending message")
            failed = True
            if generation == self._generation:
                self._messages.append(
                    Message(
                        id=f"{base}_error",
                        content=ERROR_NOTICE,
                        role=Role.ASSISTANT,
                        is_error=True,
                    )
                )
        else:
            if generation == self._generation:
                self._messages.append(
                    Message(id=f"{base}_assistant", content=reply, role=Role.ASSISTANT)
                )
        finally:
            if generation == self._generation:
                self._in_flight = False
                self._emit()
            else:
                logger.info("Dropping outcome of a request from a reset conversation")

        if failed and generation == self._generation:
            await self._notify_failure()
        return submitted

    def reply_to(self, submitted: Message) -> Message | None:
        """The reply or error notice recorded for a submitted message.

        None while the request is in flight, or when the conversation was
        reset before it finished.
        """
        base = submitted.id.removesuffix("_user")
        outcome_ids = {f"{base}_assistant", f"{base}_error"}
        return next((m for m in self._messages if m.id in outcome_ids), None)

    def context_window(self) -> list[dict[str, str]]:
        """The most recent genuine exchanges, oldest first, in API format.

        The greeting and error notices are excluded.
        """
        genuine = [m for m in self._messages if m.id != self._greeting_id and not m.is_error]
        return [m.to_api_message() for m in genuine[-self.window_size :]]

    # -- Internals -------------------------------------------------------------

    def _next_stamp(self) -> str:
        """Millisecond timestamp, bumped when needed so it strictly increases."""
        stamp = int(self._clock() * 1000)
        if stamp <= self._last_stamp:
            stamp = self._last_stamp + 1
        self._last_stamp = stamp
        return str(stamp)

    async def _request(self, text: str, history: list[dict[str, str]]) -> str:
        # A synchronous raise lands in the caller's except block just like a
        # rejected awaitable.
        result = self._complete(text, history)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, str) or not result.strip():
            msg = f"Completion service returned no usable text: {result!r}"
            raise CompletionError(msg)
        return result

    async def _notify_failure(self) -> None:
        if self._notifier is None:
            return
        try:
            result = self._notifier.notify(NOTIFY_TITLE, NOTIFY_MESSAGE, NOTIFY_SEVERITY)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Notifier failed while reporting a send error")
