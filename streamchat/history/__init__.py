"""
Conversation state for a chat session.
"""

from __future__ import annotations

from .conversation import Conversation
from .models import DEFAULT_SYSTEM_PROMPT, Message, Role

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "Conversation",
    "Message",
    "Role",
]
