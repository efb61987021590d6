"""Formatting of GL debug-output messages."""

from __future__ import annotations

from typing import Any

__all__ = [
    "DEBUG_SOURCE_API",
    "DEBUG_SOURCE_WINDOW_SYSTEM",
    "DEBUG_SOURCE_SHADER_COMPILER",
    "DEBUG_SOURCE_THIRD_PARTY",
    "DEBUG_SOURCE_APPLICATION",
    "DEBUG_SOURCE_OTHER",
    "DEBUG_TYPE_ERROR",
    "DEBUG_TYPE_DEPRECATED_BEHAVIOR",
    "DEBUG_TYPE_UNDEFINED_BEHAVIOR",
    "DEBUG_TYPE_PORTABILITY",
    "DEBUG_TYPE_PERFORMANCE",
    "DEBUG_TYPE_MARKER",
    "DEBUG_TYPE_OTHER",
    "DEBUG_SEVERITY_NOTIFICATION",
    "DEBUG_SEVERITY_LOW",
    "DEBUG_SEVERITY_MEDIUM",
    "DEBUG_SEVERITY_HIGH",
    "describe_source",
    "describe_type",
    "describe_severity",
    "format_message",
    "message_callback",
]

DEBUG_SOURCE_API = 0x8246
DEBUG_SOURCE_WINDOW_SYSTEM = 0x8247
DEBUG_SOURCE_SHADER_COMPILER = 0x8248
DEBUG_SOURCE_THIRD_PARTY = 0x8249
DEBUG_SOURCE_APPLICATION = 0x824A
DEBUG_SOURCE_OTHER = 0x824B

DEBUG_TYPE_ERROR = 0x824C
DEBUG_TYPE_DEPRECATED_BEHAVIOR = 0x824D
DEBUG_TYPE_UNDEFINED_BEHAVIOR = 0x824E
DEBUG_TYPE_PORTABILITY = 0x824F
DEBUG_TYPE_PERFORMANCE = 0x8250
DEBUG_TYPE_OTHER = 0x8251
DEBUG_TYPE_MARKER = 0x8268

DEBUG_SEVERITY_HIGH = 0x9146
DEBUG_SEVERITY_MEDIUM = 0x9147
DEBUG_SEVERITY_LOW = 0x9148
DEBUG_SEVERITY_NOTIFICATION = 0x826B

_UNKNOWN = "Unknown"

_SOURCES = {
    DEBUG_SOURCE_API: "API",
    DEBUG_SOURCE_WINDOW_SYSTEM: "WINDOW SYSTEM",
    DEBUG_SOURCE_SHADER_COMPILER: "SHADER COMPILER",
    DEBUG_SOURCE_THIRD_PARTY: "THIRD PARTY",
    DEBUG_SOURCE_APPLICATION: "APPLICATION",
    DEBUG_SOURCE_OTHER: "OTHER",
}

_TYPES = {
    DEBUG_TYPE_ERROR: "ERROR",
    DEBUG_TYPE_DEPRECATED_BEHAVIOR: "DEPRECATED_BEHAVIOR",
    DEBUG_TYPE_UNDEFINED_BEHAVIOR: "UNDEFINED_BEHAVIOR",
    DEBUG_TYPE_PORTABILITY: "PORTABILITY",
    DEBUG_TYPE_PERFORMANCE: "PERFORMANCE",
    DEBUG_TYPE_MARKER: "MARKER",
    DEBUG_TYPE_OTHER: "OTHER",
}

_SEVERITIES = {
    DEBUG_SEVERITY_NOTIFICATION: "NOTIFICATION",
    DEBUG_SEVERITY_LOW: "LOW",
    DEBUG_SEVERITY_MEDIUM: "MEDIUM",
    DEBUG_SEVERITY_HIGH: "HIGH",
}


def describe_source(source: int) -> str:
    """Name of a debug message source."""
    return _SOURCES.get(source, _UNKNOWN)


def describe_type(type_: int) -> str:
    """Name of a debug message type."""
    return _TYPES.get(type_, _UNKNOWN)


def describe_severity(severity: int) -> str:
    """Name of a debug message severity."""
    return _SEVERITIES.get(severity, _UNKNOWN)


def format_message(
    source: int, type_: int, message_id: int, severity: int, message: str
) -> str:
    """Render one debug message as a single line."""
    return (
        f"[GL CALLBACK]: source = {describe_source(source)}"
        f", type = {describe_type(type_)}"
        f", severity = {describe_severity(severity)}"
        f", ID = '{message_id}'"
        f", message = '{message}'"
    )


def _message_text(message: Any, length: int) -> str:
    if isinstance(message, str):
        return message
    if isinstance(message, (bytes, bytearray)):
        raw = bytes(message)
    elif isinstance(getattr(message, "value", None), bytes):
        raw = message.value
    elif length >= 0:
        raw = bytes(message[:length])
    else:
        return str(message)
    return raw.decode("utf-8", errors="replace")


def message_callback(
    source: int,
    type_: int,
    message_id: int,
    severity: int,
    length: int,
    message: Any,
    user_param: Any,
) -> None:
    """Print a GL debug message; suitable as a debug-output callback."""
    text = _message_text(message, length)
    print(format_message(source, type_, message_id, severity, text), flush=True)