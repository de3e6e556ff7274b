#!/usr/bin/env python3
"""
Tests for the in-memory conversation log.
"""

from streamchat.history import DEFAULT_SYSTEM_PROMPT, Conversation


def test_starts_with_single_system_message():
    conversation = Conversation()
    assert len(conversation) == 1
    assert conversation[0].role == "system"
    assert conversation[0].content == DEFAULT_SYSTEM_PROMPT
    assert conversation.visible_messages() == []


def test_custom_system_prompt():
    conversation = Conversation("Answer in French.")
    assert conversation.wire_messages() == [
        {"role": "system", "content": "Answer in French."}
    ]


def test_append_returns_index():
    conversation = Conversation()
    assert conversation.append("user", "hi") == 1
    assert conversation.append("assistant") == 2
    assert conversation[2].content == ""


def test_append_to_and_replace_target_one_slot():
    conversation = Conversation()
    conversation.append("user", "hi")
    slot = conversation.append("assistant")

    conversation.append_to(slot, "Hel")
    conversation.append_to(slot, "lo")
    assert conversation[slot].content == "Hello"

    conversation.replace(slot, "error")
    assert conversation[slot].content == "error"
    assert conversation[1].content == "hi"
    assert len(conversation) == 3


def test_wire_messages_upto_excludes_tail():
    conversation = Conversation()
    conversation.append("user", "hi")
    conversation.append("assistant")
    assert [m["role"] for m in conversation.wire_messages(upto=2)] == ["system", "user"]


def test_messages_returns_copy():
    conversation = Conversation()
    conversation.messages.append(conversation[0])
    assert len(conversation) == 1


def test_subscribe_and_unsubscribe():
    conversation = Conversation()
    seen = []
    unsubscribe = conversation.subscribe(lambda conv: seen.append(len(conv)))

    conversation.append("user", "a")
    slot = conversation.append("assistant")
    conversation.append_to(slot, "x")
    unsubscribe()
    conversation.replace(slot, "y")

    assert seen == [2, 3, 3]


def test_failing_observer_does_not_block_others():
    conversation = Conversation()
    seen = []

    def broken(conv):
        raise RuntimeError("renderer crashed")

    conversation.subscribe(broken)
    conversation.subscribe(lambda conv: seen.append(conv[len(conv) - 1].content))

    conversation.append("user", "still works")
    assert seen == ["still works"]
