"""
Centralized logging and error handling utilities for streamchat.

This module provides helpers that standardize how operations
are logged and how failures are described to the user.

Features:
- Structured logging with contextual information
- Error classification for transport, HTTP and payload failures
- Performance timing
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog

from streamchat.llm.exceptions import (
    HTTPStatusError,
    LLMError,
    PayloadError,
    StreamingError,
)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Set the stdlib root level that structlog filters against."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )


class ChatErrorHandler:
    """Classifies send failures and renders their user-facing text."""

    @staticmethod
    def classify_error(error: Exception) -> str:
        """
        Classify an error into a category for logging.

        Args:
            error: The exception to classify

        Returns:
            The error category
        """
        if isinstance(error, HTTPStatusError):
            return "http_status_error"
        if isinstance(error, StreamingError) and isinstance(error.__cause__, Exception):
            cause_category = ChatErrorHandler.classify_error(error.__cause__)
            if cause_category != "unknown_error":
                return cause_category
        if isinstance(error, TimeoutError | httpx.TimeoutException):
            return "timeout_error"
        if isinstance(error, ConnectionError | OSError | httpx.TransportError):
            return "connection_error"
        if isinstance(error, StreamingError):
            return "stream_error"
        if isinstance(error, PayloadError | ValueError):
            return "payload_error"
        return "unknown_error"

    @staticmethod
    def describe(error: Exception) -> str:
        """Message text to embed in the pending assistant message."""
        message = str(error)
        if message:
            return message
        if isinstance(error, LLMError) and error.status_code is not None:
            return f"HTTP {error.status_code}"
        return type(error).__name__

    @staticmethod
    def log_failure(
        error: Exception,
        operation: str,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Log a failure with its category and return the category."""
        error_category = ChatErrorHandler.classify_error(error)
        logger.error(
            "Operation failed",
            operation=operation,
            error_type=type(error).__name__,
            error_category=error_category,
            error_message=str(error),
            status_code=getattr(error, "status_code", None),
            **(context or {}),
        )
        return error_category


@asynccontextmanager
async def operation_context(
    operation: str,
    *,
    context: dict[str, Any] | None = None,
    log_timing: bool = True,
):
    """
    Async context manager for operation logging.

    Args:
        operation: Description of the operation
        context: Additional context for logging
        log_timing: Whether to log operation timing

    Yields:
        Bound logger for the operation
    """
    operation_logger = logger.bind(
        operation=operation,
        **(context or {}),
    )

    operation_logger.info("Operation started")
    start_time = time.perf_counter() if log_timing else None

    try:
        yield operation_logger

        log_data: dict[str, Any] = {}
        if log_timing and start_time is not None:
            duration = round((time.perf_counter() - start_time) * 1000, 2)
            log_data["duration_ms"] = duration

        operation_logger.info("Operation completed successfully", **log_data)

    except Exception as e:
        error_log_data: dict[str, Any] = {
            "error_type": type(e).__name__,
            "error_message": str(e),
        }
        if log_timing and start_time is not None:
            duration = round((time.perf_counter() - start_time) * 1000, 2)
            error_log_data["duration_ms"] = duration

        operation_logger.error("Operation failed", **error_log_data)
        raise


class ContextualLogger:
    """Logger that maintains context across related operations."""

    def __init__(self, base_context: dict[str, Any] | None = None):
        self.base_context = base_context or {}
        self._logger = logger.bind(**self.base_context)

    def bind(self, **context: Any) -> ContextualLogger:
        """Create a new logger with additional context."""
        merged_context = {**self.base_context, **context}
        return ContextualLogger(merged_context)

    def info(self, message: str, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._logger.error(message, **context)

    def debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, **context)
