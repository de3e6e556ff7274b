"""
Chat session: folds a streamed completion into the conversation log.

One send appends the user message and an empty assistant placeholder, then
streams the reply into that placeholder delta by delta. Failures replace the
placeholder with an error description, so the conversation always stays
usable for the next turn.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from streamchat.config import DEFAULT_ERROR_LABEL
from streamchat.credentials import CredentialStore
from streamchat.history.conversation import Conversation
from streamchat.llm.client import CompletionClient
from streamchat.llm.streaming.models import StreamEventType
from streamchat.llm.streaming.parser import StreamDecoder
from streamchat.logging_utils import (
    ChatErrorHandler,
    ContextualLogger,
    operation_context,
)

ClientFactory = Callable[[str], CompletionClient]


class SendOutcome(Enum):
    """Result of one send."""
    SKIPPED = "skipped"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    FAILED = "failed"


class ChatSession:
    """
    Single-writer bridge between the stream decoder and the conversation.

    Only one send may run at a time. While `busy` is set the caller should not
    send again; a send attempted anyway is skipped rather than queued.
    """

    def __init__(
        self,
        conversation: Conversation,
        client_factory: ClientFactory,
        credentials: CredentialStore,
        *,
        error_label: str = DEFAULT_ERROR_LABEL,
        log_deltas: bool = False,
    ) -> None:
        self.conversation = conversation
        self.client_factory = client_factory
        self.credentials = credentials
        self.error_label = error_label
        self.log_deltas = log_deltas
        self._busy = False
        self._logger = ContextualLogger({"component": "chat_session"})

    @property
    def busy(self) -> bool:
        return self._busy

    def save_credential(self, value: str) -> None:
        """Store the API key; an empty value clears it."""
        if value:
            self.credentials.set(value)
        else:
            self.credentials.clear()

    async def send(self, text: str) -> SendOutcome:
        """Send one user message and stream the reply into the conversation."""
        if self._busy:
            self._logger.warning("Send ignored while another send is in flight")
            return SendOutcome.SKIPPED

        self._busy = True
        try:
            return await self._send(text)
        finally:
            self._busy = False

    async def _send(self, text: str) -> SendOutcome:
        prompt = text.strip()
        api_key = self.credentials.get()
        if not prompt or not api_key:
            return SendOutcome.SKIPPED

        self.conversation.append("user", prompt)
        context_messages = self.conversation.wire_messages()
        slot = self.conversation.append("assistant", "")

        decoder = StreamDecoder()
        try:
            async with operation_context(
                "chat_send",
                context={"slot": slot, "context_messages": len(context_messages)},
            ) as op_logger:
                async with self.client_factory(api_key) as client:
                    async with client.stream_completion(context_messages) as reader:
                        async for event in decoder.events(reader):
                            if event.event_type is not StreamEventType.CONTENT_DELTA:
                                continue
                            self.conversation.append_to(slot, event.text or "")
                            if self.log_deltas:
                                op_logger.debug("Delta received", text=event.text)

        except Exception as e:
            ChatErrorHandler.log_failure(e, "chat_send", {"slot": slot})
            self.conversation.replace(
                slot, f"{self.error_label}{ChatErrorHandler.describe(e)}"
            )
            return SendOutcome.FAILED

        if decoder.ended_without_done:
            self._logger.warning(
                "Stream ended without [DONE]", slot=slot, **decoder.get_stats()
            )
            return SendOutcome.INCOMPLETE

        return SendOutcome.COMPLETED
