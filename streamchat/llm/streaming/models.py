"""
Streaming-specific dataclasses for the event decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DONE_SENTINEL = "[DONE]"
NO_CONTENT_PLACEHOLDER = "(no content)"


class StreamEventType(Enum):
    """Decoded event types emitted to the chat session."""
    CONTENT_DELTA = "content_delta"
    DONE = "done"
    IGNORABLE = "ignorable"


class FrameKind(Enum):
    """Outcome of parsing one data frame payload."""
    DELTA = "delta"
    NO_CONTENT = "no_content"
    MALFORMED = "malformed"
    DONE = "done"


@dataclass(frozen=True)
class ParsedFrame:
    """Tagged result of parsing a single data frame payload."""
    kind: FrameKind
    text: str | None = None
    raw: str = ""
    error: str | None = None


@dataclass(frozen=True)
class StreamEvent:
    """Decoded stream event."""
    event_type: StreamEventType
    text: str | None = None

    @classmethod
    def content_delta(cls, text: str) -> StreamEvent:
        if not text:
            raise ValueError("content delta text must be non-empty")
        return cls(StreamEventType.CONTENT_DELTA, text)

    @classmethod
    def done(cls) -> StreamEvent:
        return cls(StreamEventType.DONE)

    @classmethod
    def ignorable(cls) -> StreamEvent:
        return cls(StreamEventType.IGNORABLE)

    @property
    def is_done(self) -> bool:
        return self.event_type is StreamEventType.DONE


@dataclass
class DecoderStats:
    """Counters for one decoder instance."""
    total_frames: int = 0
    content_frames: int = 0
    empty_frames: int = 0
    malformed_frames: int = 0
    ignored_lines: int = 0
    chunks: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "total_frames": self.total_frames,
            "content_frames": self.content_frames,
            "empty_frames": self.empty_frames,
            "malformed_frames": self.malformed_frames,
            "ignored_lines": self.ignored_lines,
            "chunks": self.chunks,
        }
