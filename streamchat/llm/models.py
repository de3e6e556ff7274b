"""
Wire models for the chat completion endpoint.

This module provides the request body sent to the endpoint and the shapes
read back from it:
- The streaming request body
- Streamed chunk payloads (`choices[0].delta.content`)
- Whole, non-streamed completion payloads (`choices[0].message.content`)
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from streamchat.history.models import Role


class WireMessage(BaseModel):
    """OpenAI-compatible message structure."""
    role: Role
    content: str


class CompletionRequest(BaseModel):
    """Chat completion request body."""
    model: str
    messages: list[WireMessage]
    temperature: float = 0.7
    stream: bool = True

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class ChunkDelta(BaseModel):
    content: str | None = None


class ChunkChoice(BaseModel):
    delta: ChunkDelta | None = None


class CompletionChunk(BaseModel):
    """One streamed data frame payload. Only the first choice is validated."""
    choices: list[Any] = Field(default_factory=list)

    def delta_content(self) -> str | None:
        """Content of the first choice's delta, if any."""
        if not self.choices:
            return None
        choice = ChunkChoice.model_validate(self.choices[0])
        if choice.delta is None:
            return None
        return choice.delta.content


class ResponseMessage(BaseModel):
    content: str | None = None


class ResponseChoice(BaseModel):
    message: ResponseMessage | None = None


class CompletionResponse(BaseModel):
    """Complete, non-streamed response payload."""
    choices: list[Any] = Field(default_factory=list)

    def message_content(self) -> str | None:
        if not self.choices:
            return None
        choice = ResponseChoice.model_validate(self.choices[0])
        if choice.message is None:
            return None
        return choice.message.content
