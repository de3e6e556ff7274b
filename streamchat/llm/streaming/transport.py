"""
Transport reader: turns a byte-oriented response body into decoded text chunks.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable

import httpx

from ..exceptions import StreamingError, StreamUnavailableError

logger = logging.getLogger(__name__)

WHOLE_PAYLOAD_CONTENT_TYPES = ("application/json",)


class TransportReader:
    """
    Pull-based source of UTF-8 text chunks over an async byte stream.

    Multi-byte characters split across byte chunks are carried over to the
    next decode call. A reader without a source is not streamable; callers
    fall back to reading the whole body with `read_body()`.
    """

    def __init__(
        self,
        source: AsyncIterable[bytes] | None,
        *,
        body: Callable[[], Awaitable[bytes]] | None = None,
        encoding: str = "utf-8",
    ):
        self._source = source
        self._body = body
        self._encoding = self._resolve_encoding(encoding)
        self._consumed = False

    @classmethod
    def from_response(cls, response: httpx.Response) -> TransportReader:
        """Build a reader over an httpx streaming response."""
        content_type = response.headers.get("content-type", "")
        encoding = response.charset_encoding or "utf-8"
        if any(t in content_type for t in WHOLE_PAYLOAD_CONTENT_TYPES):
            return cls(None, body=response.aread, encoding=encoding)
        return cls(response.aiter_bytes(), encoding=encoding)

    @staticmethod
    def _resolve_encoding(encoding: str) -> str:
        try:
            return codecs.lookup(encoding).name
        except LookupError:
            logger.warning(f"Unknown charset {encoding!r}, decoding as utf-8")
            return "utf-8"

    @property
    def streamable(self) -> bool:
        return self._source is not None

    async def read_body(self) -> str:
        """Read the whole body as text (non-streamed fallback)."""
        if self._body is None:
            raise StreamUnavailableError("Response has no readable body")
        raw = await self._body()
        return raw.decode(self._encoding, errors="replace")

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iter_text()

    async def _iter_text(self) -> AsyncIterator[str]:
        if self._source is None:
            raise StreamUnavailableError("Response has no streamable body")
        if self._consumed:
            raise StreamingError("Transport stream has already been consumed")
        self._consumed = True

        decoder = codecs.getincrementaldecoder(self._encoding)(errors="replace")
        async for chunk in self._source:
            if not chunk:
                continue
            text = decoder.decode(chunk)
            if text:
                yield text

        tail = decoder.decode(b"", final=True)
        if tail:
            yield tail
