"""
Streaming chat client for OpenAI-compatible completion endpoints.
"""

from __future__ import annotations

from .chat_session import ChatSession, SendOutcome
from .history import Conversation, Message

__all__ = [
    "ChatSession",
    "Conversation",
    "Message",
    "SendOutcome",
]
