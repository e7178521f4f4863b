"""Logging utilities for the LLM provider registry.

This module provides standardized logging functionality for registry operations.
The package logger is silent until :func:`configure_logging` is called or the
application configures ``logging`` itself.
"""

import logging
import os
import sys
from enum import Enum
from typing import Any, Optional, Union

ROOT_LOGGER_NAME = "llm_registry"
ENV_LOG_LEVEL = "LLMR_LOG_LEVEL"

_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class LogEvent(str, Enum):
    """Event types for registry logging."""

    REGISTRY_LOAD = "registry_load"
    REGISTRY_FETCH = "registry_fetch"
    REGISTRY_SYNC = "registry_sync"


class _StderrHandler(logging.StreamHandler):
    """Stream handler that writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace.

    Args:
        name: Sub-logger name; module ``__name__`` values are accepted as-is

    Returns:
        Logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Args:
        level: Level name or number. Falls back to ``LLMR_LOG_LEVEL`` and then
            ``WARNING``.

    Returns:
        The configured package logger
    """
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, _StderrHandler) for h in logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def _log(level: int, event: LogEvent, message: str, **data: Any) -> None:
    """Log an event on the package logger.

    Args:
        level: Severity level
        event: Event type
        message: Human readable message
        **data: Extra key/value context appended to the message
    """
    if data:
        details = ", ".join(f"{key}={value}" for key, value in data.items())
        message = f"{message} ({details})"
    get_logger(event.value).log(level, message, extra={"event": event.value, "event_data": data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _log(logging.DEBUG, event, message, **data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _log(logging.INFO, event, message, **data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _log(logging.WARNING, event, message, **data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _log(logging.ERROR, event, message, **data)
