"""Pluggable logging used throughout the package."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Logger(Protocol):
    """Interface of the loggers used by the package."""

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...


class FallbackLogger:
    """Logger that forwards to the standard library 'nri' logger."""

    def __init__(self, name: str = "nri") -> None:
        self._log = logging.getLogger(name)

    def debug(self, msg: str, *args: Any) -> None:
        self._log.debug(msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._log.info(msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._log.warning(msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._log.error(msg, *args)


_logger: Logger = FallbackLogger()


def set_logger(logger: Logger) -> None:
    """Set the logger used by the package."""
    global _logger
    _logger = logger


def get_logger() -> Logger:
    """Return the logger used by the package."""
    return _logger


def debug(msg: str, *args: Any) -> None:
    """Log a formatted debug message."""
    _logger.debug(msg, *args)


def info(msg: str, *args: Any) -> None:
    """Log a formatted informational message."""
    _logger.info(msg, *args)


def warning(msg: str, *args: Any) -> None:
    """Log a formatted warning message."""
    _logger.warning(msg, *args)


def error(msg: str, *args: Any) -> None:
    """Log a formatted error message."""
    _logger.error(msg, *args)