"""
Line-buffered SSE decoder for chat completion streams.

Turns decoded text chunks into content deltas and a terminal DONE event,
dropping heartbeat, comment and malformed frames without raising.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import AsyncGenerator, Iterable

from pydantic import ValidationError

from ..exceptions import PayloadError
from ..models import CompletionChunk, CompletionResponse
from .models import (
    DONE_SENTINEL,
    NO_CONTENT_PLACEHOLDER,
    DecoderStats,
    FrameKind,
    ParsedFrame,
    StreamEvent,
    StreamEventType,
)
from .transport import TransportReader

logger = logging.getLogger(__name__)

DATA_PREFIX = re.compile(r"^data:\s*")


class StreamDecoder:
    """
    Stateful decoder for one response stream.

    The line buffer persists between `feed` calls, so a frame split across
    transport chunks is decoded once its newline arrives. After `[DONE]` the
    decoder is finished and ignores all further input.
    """

    def __init__(self) -> None:
        self.buffer = ""
        self.finished = False
        self.saw_done = False
        self.stats = DecoderStats()

    @property
    def ended_without_done(self) -> bool:
        return self.finished and not self.saw_done

    def feed(self, text: str) -> list[StreamEvent]:
        """Append a chunk and drain every event that is now complete."""
        if self.finished:
            return []

        self.stats.chunks += 1
        self.buffer += text
        events: list[StreamEvent] = []

        while "\n" in self.buffer:
            line, self.buffer = self.buffer.split("\n", 1)
            event = self._decode_line(line)
            if event.event_type is StreamEventType.IGNORABLE:
                continue
            events.append(event)
            if event.is_done:
                self.finished = True
                self.saw_done = True
                self.buffer = ""
                break

        return events

    def finish(self) -> list[StreamEvent]:
        """Mark transport end. An unterminated trailing line is dropped."""
        if self.finished:
            return []
        if self.buffer.strip():
            logger.debug(f"Dropping unterminated trailing line: {self.buffer!r}")
        self.buffer = ""
        self.finished = True
        return []

    def _decode_line(self, raw_line: str) -> StreamEvent:
        line = raw_line.strip()
        if not line:
            return StreamEvent.ignorable()

        if not line.startswith("data:"):
            self.stats.ignored_lines += 1
            return StreamEvent.ignorable()

        self.stats.total_frames += 1
        frame = self.parse_frame(DATA_PREFIX.sub("", line, count=1))

        match frame.kind:
            case FrameKind.DONE:
                return StreamEvent.done()
            case FrameKind.DELTA:
                self.stats.content_frames += 1
                return StreamEvent.content_delta(frame.text or "")
            case FrameKind.NO_CONTENT:
                self.stats.empty_frames += 1
                return StreamEvent.ignorable()
            case FrameKind.MALFORMED:
                self.stats.malformed_frames += 1
                logger.debug(f"Skipping malformed frame: {frame.error}")
                return StreamEvent.ignorable()

    @staticmethod
    def parse_frame(payload: str) -> ParsedFrame:
        """Parse one data frame payload into a tagged frame."""
        if payload == DONE_SENTINEL:
            return ParsedFrame(FrameKind.DONE, raw=payload)

        try:
            data = json.loads(payload)
        except (ValueError, RecursionError) as e:
            # Oversized integers and deep nesting fail outside JSONDecodeError
            return ParsedFrame(
                FrameKind.MALFORMED, raw=payload, error=f"JSON decode error: {e}"
            )

        try:
            content = CompletionChunk.model_validate(data).delta_content()
        except ValidationError:
            # Valid JSON with an unexpected shape carries no delta
            return ParsedFrame(FrameKind.NO_CONTENT, raw=payload)

        if not content:
            return ParsedFrame(FrameKind.NO_CONTENT, raw=payload)
        return ParsedFrame(FrameKind.DELTA, text=content, raw=payload)

    @staticmethod
    def parse_whole_payload(text: str) -> str:
        """Extract the message content from a complete, non-streamed body."""
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise PayloadError(f"Invalid JSON in response body: {e}") from e

        try:
            content = CompletionResponse.model_validate(data).message_content()
        except ValidationError:
            content = None
        return content or NO_CONTENT_PLACEHOLDER

    async def events(
        self, reader: TransportReader
    ) -> AsyncGenerator[StreamEvent]:
        """
        Decode a transport into events, one at a time.

        Each event is yielded before the next chunk is pulled. Without a
        streamable body the whole payload is parsed into a single delta.
        """
        if not reader.streamable:
            content = self.parse_whole_payload(await reader.read_body())
            self.finished = True
            self.saw_done = True
            yield StreamEvent.content_delta(content)
            yield StreamEvent.done()
            return

        async for chunk in reader:
            for event in self.feed(chunk):
                yield event
            if self.finished:
                return

        self.finish()

    def get_stats(self) -> dict[str, int]:
        """Get decoder statistics for monitoring."""
        return self.stats.as_dict()

    def reset(self) -> None:
        """Reset decoder state for a new stream."""
        self.buffer = ""
        self.finished = False
        self.saw_done = False
        self.stats = DecoderStats()


def decode_chunks(chunks: Iterable[str]) -> list[StreamEvent]:
    """Run a fresh decoder over text chunks and collect the events."""
    decoder = StreamDecoder()
    events: list[StreamEvent] = []
    for chunk in chunks:
        events.extend(decoder.feed(chunk))
        if decoder.finished:
            return events
    events.extend(decoder.finish())
    return events
