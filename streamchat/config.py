"""Configuration management for the streaming chat client."""

import os
from typing import Any

import yaml
from dotenv import load_dotenv

from streamchat.history.models import DEFAULT_SYSTEM_PROMPT

DEFAULT_ERROR_LABEL = "Request failed: "


class Configuration:
    """Manages configuration and environment variables for the chat client."""

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize configuration from YAML and environment variables."""
        self.load_env()  # Load .env for API keys
        self._config_path = config_path or os.path.join(
            os.path.dirname(__file__), "config.yaml"
        )
        self._config = self._load_yaml_config()

    @staticmethod
    def load_env() -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self._config_path) as file:
            config = yaml.safe_load(file)
            if not isinstance(config, dict):
                raise ValueError(
                    f"Config file must be YAML dict, got {type(config)}"
                )
            return config

    def get_config_dict(self) -> dict[str, Any]:
        """Get the full configuration dictionary."""
        return self._config

    def get_llm_config(self) -> dict[str, Any]:
        """Get the completion endpoint configuration from YAML.

        Returns:
            LLM configuration dictionary.

        Raises:
            ValueError: If a required parameter is missing.
        """
        llm_config = self._config.get("llm", {})

        required_keys = ["base_url", "endpoint", "model", "temperature"]
        for key in required_keys:
            if key not in llm_config:
                raise ValueError(
                    f"llm.{key} must be explicitly configured in config.yaml"
                )

        temperature = llm_config["temperature"]
        if not isinstance(temperature, int | float):
            raise ValueError("llm.temperature must be a number")

        return llm_config

    def get_http_client_config(self) -> dict[str, Any]:
        """Get HTTP client timeouts. A missing read_timeout means no timeout."""
        http_config = dict(self._config.get("llm", {}).get("http_client", {}))
        http_config.setdefault("read_timeout", None)
        return http_config

    def get_chat_config(self) -> dict[str, Any]:
        """Get chat session configuration with defaults applied."""
        chat_config = self._config.get("chat", {})
        return {
            "system_prompt": chat_config.get("system_prompt", DEFAULT_SYSTEM_PROMPT),
            "error_label": chat_config.get("error_label", DEFAULT_ERROR_LABEL),
        }

    def get_credentials_config(self) -> dict[str, Any]:
        """Get the credential store location."""
        credentials_config = self._config.get("credentials", {})
        return {
            "env_file": credentials_config.get("env_file", ".env"),
            "key_name": credentials_config.get("key_name", "OPENAI_API_KEY"),
        }

    def get_logging_config(self) -> dict[str, Any]:
        """Get logging configuration."""
        logging_config = self._config.get("logging", {})
        return {
            "level": logging_config.get("level", "INFO"),
            "log_deltas": logging_config.get("log_deltas", False),
        }
