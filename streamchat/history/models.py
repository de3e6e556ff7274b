# streamchat/history/models.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Role = Literal["system", "user", "assistant"]

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


class Message(BaseModel):
    """
    One conversation entry. Content is updated in place while streaming.
    """
    role: Role
    content: str = ""

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}
