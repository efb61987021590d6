"""Coloured console logging with a level prefix."""

from __future__ import annotations

from enum import Enum

__all__ = ["LogLevel", "log", "error", "warning", "info", "debug"]

_RESET = "\033[0m"


class LogLevel(Enum):
    """Severity of a log message."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"


_STYLES = {
    LogLevel.ERROR: ("[ERROR] ", "\033[31m"),
    LogLevel.WARNING: ("[WARNING] ", "\033[33m"),
    LogLevel.INFO: ("[INFO] ", "\033[32m"),
    LogLevel.DEBUG: ("[DEBUG] ", "\033[34m"),
}


def log(level: LogLevel, message: str) -> None:
    """Print ``message`` to stdout, coloured and prefixed by ``level``."""
    prefix, colour = _STYLES[level]
    print(f"{colour}{prefix}{message}{_RESET}")


def error(message: str) -> None:
    """Log an error message."""
    log(LogLevel.ERROR, message)


def warning(message: str) -> None:
    """Log a warning message."""
    log(LogLevel.WARNING, message)


def info(message: str) -> None:
    """Log an informational message."""
    log(LogLevel.INFO, message)


def debug(message: str) -> None:
    """Log a debug message."""
    log(LogLevel.DEBUG, message)