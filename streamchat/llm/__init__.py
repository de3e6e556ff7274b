"""
Chat completion integration.

This package provides:
- An httpx client for streamed completions
- Wire models for requests and streamed chunks
- The incremental stream decoder
"""

from __future__ import annotations

from .client import CompletionClient
from .exceptions import (
    HTTPStatusError,
    LLMError,
    PayloadError,
    StreamingError,
    StreamUnavailableError,
)
from .models import CompletionChunk, CompletionRequest, CompletionResponse, WireMessage

__all__ = [
    "CompletionChunk",
    # Client
    "CompletionClient",
    "CompletionRequest",
    "CompletionResponse",
    # Exceptions
    "HTTPStatusError",
    "LLMError",
    "PayloadError",
    "StreamUnavailableError",
    "StreamingError",
    "WireMessage",
]
