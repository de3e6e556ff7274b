"""
Console runner for the streaming chat client.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from streamchat.chat_session import ChatSession, ClientFactory, SendOutcome
from streamchat.config import Configuration
from streamchat.credentials import DotenvCredentialStore
from streamchat.history.conversation import Conversation
from streamchat.llm.client import CompletionClient
from streamchat.logging_utils import configure_logging


class StreamPrinter:
    """Prints the growing tail of the last message as deltas arrive."""

    def __init__(self, out=sys.stdout) -> None:
        self.out = out
        self._index = -1
        self._seen = ""

    def __call__(self, conversation: Conversation) -> None:
        index = len(conversation) - 1
        message = conversation[index]
        if message.role != "assistant":
            return
        if index != self._index:
            self._index = index
            self._seen = ""
            self.out.write("assistant> ")
        content = message.content
        if content.startswith(self._seen):
            self.out.write(content[len(self._seen):])
        else:
            # Content was replaced (error path)
            self.out.write("\n" + content)
        self._seen = content
        self.out.flush()


def build_client_factory(config: Configuration) -> ClientFactory:
    """Bind the endpoint settings and resolved timeouts into a client factory."""
    client_config = {
        **config.get_llm_config(),
        "http_client": config.get_http_client_config(),
    }
    return lambda api_key: CompletionClient(client_config, api_key)


async def run_console(config: Configuration) -> None:
    chat_config = config.get_chat_config()
    credentials_config = config.get_credentials_config()
    logging_config = config.get_logging_config()

    credentials = DotenvCredentialStore(
        credentials_config["env_file"], credentials_config["key_name"]
    )
    conversation = Conversation(chat_config["system_prompt"])
    conversation.subscribe(StreamPrinter())

    session = ChatSession(
        conversation,
        build_client_factory(config),
        credentials,
        error_label=chat_config["error_label"],
        log_deltas=logging_config["log_deltas"],
    )

    if not credentials.get():
        print("No API key saved. Use /key <value> to set one.")

    while True:
        try:
            line = await asyncio.to_thread(input, "you> ")
        except EOFError:
            break

        command = line.strip()
        if command == "/quit":
            break
        if command.startswith("/key"):
            session.save_credential(command[len("/key"):].strip())
            print("API key saved." if credentials.get() else "API key cleared.")
            continue
        if command == "/clear-key":
            session.save_credential("")
            print("API key cleared.")
            continue

        outcome = await session.send(line)
        if outcome is SendOutcome.SKIPPED:
            if not credentials.get():
                print("Set an API key first with /key <value>.")
            continue
        print()


def main() -> None:
    config = Configuration()
    configure_logging(config.get_logging_config()["level"])
    try:
        asyncio.run(run_console(config))
    except KeyboardInterrupt:
        logging.info("Keyboard interrupt received, shutting down...")


if __name__ == "__main__":
    main()
