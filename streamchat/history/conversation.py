# streamchat/history/conversation.py
"""
In-memory conversation log.

The log has a single writer (the chat session) and any number of passive
observers. Observers are notified synchronously after each mutation, so a
renderer sees every streamed delta before the next transport read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from streamchat.history.models import DEFAULT_SYSTEM_PROMPT, Message, Role

logger = logging.getLogger(__name__)

Observer = Callable[["Conversation"], None]


class Conversation:
    """Ordered message log that always starts with one system message."""

    def __init__(self, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> None:
        self._messages: list[Message] = [
            Message(role="system", content=system_prompt)
        ]
        self._observers: list[Observer] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    @property
    def messages(self) -> list[Message]:
        """Copy of the messages; mutate through the conversation methods."""
        return list(self._messages)

    def append(self, role: Role, content: str = "") -> int:
        """Append a message and return its index."""
        self._messages.append(Message(role=role, content=content))
        self._notify()
        return len(self._messages) - 1

    def append_to(self, index: int, text: str) -> None:
        """Concatenate text onto the content at index."""
        message = self._messages[index]
        message.content = message.content + text
        self._notify()

    def replace(self, index: int, text: str) -> None:
        """Overwrite the content at index."""
        self._messages[index].content = text
        self._notify()

    def wire_messages(self, upto: int | None = None) -> list[dict[str, Any]]:
        """Serialize messages[:upto] for a completion request."""
        return [m.to_wire() for m in self._messages[:upto]]

    def visible_messages(self) -> list[Message]:
        return [m for m in self._messages if m.role != "system"]

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception as e:
                # A broken renderer must not abort the stream
                logger.warning(f"Conversation observer failed: {e}")
