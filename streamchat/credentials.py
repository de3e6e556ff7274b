"""
Credential storage for the completion API key.

The chat session only needs get/set/clear of one named value. The default
store keeps it in a local `.env` file so it survives restarts.
"""

from __future__ import annotations

import os
from typing import Protocol

from dotenv import get_key, set_key, unset_key


class CredentialStore(Protocol):
    """Single named credential slot."""

    def get(self) -> str | None: ...

    def set(self, value: str) -> None: ...

    def clear(self) -> None: ...


class DotenvCredentialStore:
    """Persists the credential as one key in a dotenv file."""

    def __init__(self, path: str = ".env", key_name: str = "OPENAI_API_KEY"):
        self.path = path
        self.key_name = key_name

    def get(self) -> str | None:
        if not os.path.exists(self.path):
            return None
        return get_key(self.path, self.key_name) or None

    def set(self, value: str) -> None:
        set_key(self.path, self.key_name, value)

    def clear(self) -> None:
        if os.path.exists(self.path) and self.get() is not None:
            unset_key(self.path, self.key_name)


class MemoryCredentialStore:
    """Credential slot that lives only for the process."""

    def __init__(self, value: str | None = None):
        self._value = value or None

    def get(self) -> str | None:
        return self._value

    def set(self, value: str) -> None:
        self._value = value or None

    def clear(self) -> None:
        self._value = None
