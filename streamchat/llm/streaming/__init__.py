"""
Streaming functionality for chat completion responses.

- Transport reading with split multi-byte handling
- SSE line buffering and frame parsing
- Content delta extraction
"""

from __future__ import annotations

from .models import (
    DONE_SENTINEL,
    NO_CONTENT_PLACEHOLDER,
    FrameKind,
    ParsedFrame,
    StreamEvent,
    StreamEventType,
)
from .parser import StreamDecoder, decode_chunks
from .transport import TransportReader

__all__ = [
    "DONE_SENTINEL",
    "NO_CONTENT_PLACEHOLDER",
    "FrameKind",
    "ParsedFrame",
    "StreamDecoder",
    "StreamEvent",
    "StreamEventType",
    "TransportReader",
    "decode_chunks",
]
