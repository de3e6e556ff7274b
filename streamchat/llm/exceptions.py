"""
Error types for completion requests and streamed responses.

Every failure raised while a send is in flight derives from LLMError so the
chat session can surface it inside the pending assistant message.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base LLM error with request context."""

    def __init__(
        self,
        message: str,
        provider: str = "openai",
        model: str = "unknown",
        status_code: int | None = None,
        response_data: dict | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.model = model
        self.status_code = status_code
        self.response_data = response_data or {}


class HTTPStatusError(LLMError):
    """Non-success HTTP status. The message is the response body text."""

    def __init__(self, body: str, status_code: int, **kwargs):
        super().__init__(body, status_code=status_code, **kwargs)


class StreamingError(LLMError):
    """Streaming-specific errors."""
    pass


class StreamUnavailableError(StreamingError):
    """The response produced no streamable body."""
    pass


class PayloadError(LLMError):
    """A non-streamed response body could not be parsed."""
    pass
