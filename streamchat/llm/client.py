"""
HTTP client for the streaming chat completion endpoint.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from .exceptions import HTTPStatusError, StreamingError
from .models import CompletionRequest
from .streaming.transport import TransportReader

DEFAULT_ENDPOINT = "/chat/completions"


class CompletionClient:
    """HTTP client for streamed chat completions with bearer authentication."""

    def __init__(
        self,
        config: dict[str, Any],
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        required_keys = ["base_url", "model", "temperature"]
        for key in required_keys:
            if key not in config:
                raise ValueError(
                    f"Required LLM configuration parameter '{key}' not found. "
                    "All LLM parameters must be explicitly configured."
                )

        self.config: dict[str, Any] = config
        self.api_key: str = api_key
        self.endpoint: str = config.get("endpoint", DEFAULT_ENDPOINT)
        self.client: httpx.AsyncClient = httpx.AsyncClient(
            base_url=config["base_url"],
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=self._build_timeout(config.get("http_client", {})),
            transport=transport,
        )

    @staticmethod
    def _build_timeout(http_config: dict[str, Any]) -> httpx.Timeout:
        # Reads are unbounded; a stalled stream waits for the caller to give up
        return httpx.Timeout(
            connect=http_config.get("connect_timeout", 10.0),
            read=http_config.get("read_timeout"),
            write=http_config.get("write_timeout", 10.0),
            pool=http_config.get("pool_timeout", 10.0),
        )

    def build_request(self, messages: list[dict[str, Any]]) -> CompletionRequest:
        return CompletionRequest.model_validate({
            "model": self.config["model"],
            "messages": messages,
            "temperature": self.config["temperature"],
            "stream": True,
        })

    @asynccontextmanager
    async def stream_completion(
        self, messages: list[dict[str, Any]]
    ) -> AsyncIterator[TransportReader]:
        """
        Issue a streaming completion request and yield its transport reader.

        Raises:
            HTTPStatusError: Non-success status; the message is the body text.
            StreamingError: Network or transport failure, before or during
                the stream.
        """
        payload = self.build_request(messages).to_payload()
        try:
            async with self.client.stream(
                "POST", self.endpoint, json=payload
            ) as response:
                if not response.is_success:
                    await response.aread()
                    raise HTTPStatusError(
                        response.text,
                        response.status_code,
                        model=self.config["model"],
                    )

                yield TransportReader.from_response(response)

        except httpx.HTTPError as e:
            raise StreamingError(
                f"HTTP error: {e!s}", model=self.config["model"]
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
