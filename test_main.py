#!/usr/bin/env python3
"""
Tests for the console renderer.
"""

import io

import pytest
import yaml

from streamchat.config import Configuration
from streamchat.history.conversation import Conversation
from streamchat.main import StreamPrinter, build_client_factory


def test_printer_writes_only_new_text():
    out = io.StringIO()
    conversation = Conversation()
    conversation.subscribe(StreamPrinter(out))

    conversation.append("user", "hi")
    slot = conversation.append("assistant")
    conversation.append_to(slot, "Hel")
    conversation.append_to(slot, "lo")

    assert out.getvalue() == "assistant> Hello"


def test_printer_rewrites_replaced_content():
    out = io.StringIO()
    conversation = Conversation()
    conversation.subscribe(StreamPrinter(out))

    conversation.append("user", "hi")
    slot = conversation.append("assistant")
    conversation.append_to(slot, "partial")
    conversation.replace(slot, "Request failed: boom")

    assert out.getvalue() == "assistant> partial\nRequest failed: boom"


def test_printer_starts_new_prefix_per_reply():
    out = io.StringIO()
    conversation = Conversation()
    conversation.subscribe(StreamPrinter(out))

    for text in ("one", "two"):
        conversation.append("user", "q")
        slot = conversation.append("assistant")
        conversation.append_to(slot, text)

    assert out.getvalue() == "assistant> oneassistant> two"


@pytest.mark.asyncio
async def test_client_factory_uses_resolved_timeouts(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({
        "llm": {
            "base_url": "https://api.example.test/v1",
            "endpoint": "/chat/completions",
            "model": "m",
            "temperature": 0.2,
            "http_client": {"connect_timeout": 3.0},
        }
    }))

    async with build_client_factory(Configuration(str(path)))("sk-test") as client:
        assert client.client.timeout.connect == 3.0
        assert client.client.timeout.read is None
        assert client.build_request([]).model == "m"
