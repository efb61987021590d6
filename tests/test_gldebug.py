import pytest

from mazewalk import gldebug
from mazewalk.gldebug import (
    describe_severity,
    describe_source,
    describe_type,
    format_message,
    message_callback,
)


@pytest.mark.parametrize(
    ("source", "name"),
    [
        (gldebug.DEBUG_SOURCE_API, "API"),
        (gldebug.DEBUG_SOURCE_WINDOW_SYSTEM, "WINDOW SYSTEM"),
        (gldebug.DEBUG_SOURCE_SHADER_COMPILER, "SHADER COMPILER"),
        (gldebug.DEBUG_SOURCE_THIRD_PARTY, "THIRD PARTY"),
        (gldebug.DEBUG_SOURCE_APPLICATION, "APPLICATION"),
        (gldebug.DEBUG_SOURCE_OTHER, "OTHER"),
        (0, "Unknown"),
    ],
)
def test_describe_source(source, name):
    assert describe_source(source) == name


@pytest.mark.parametrize(
    ("type_", "name"),
    [
        (gldebug.DEBUG_TYPE_ERROR, "ERROR"),
        (gldebug.DEBUG_TYPE_DEPRECATED_BEHAVIOR, "DEPRECATED_BEHAVIOR"),
        (gldebug.DEBUG_TYPE_UNDEFINED_BEHAVIOR, "UNDEFINED_BEHAVIOR"),
        (gldebug.DEBUG_TYPE_PORTABILITY, "PORTABILITY"),
        (gldebug.DEBUG_TYPE_PERFORMANCE, "PERFORMANCE"),
        (gldebug.DEBUG_TYPE_MARKER, "MARKER"),
        (gldebug.DEBUG_TYPE_OTHER, "OTHER"),
        (1, "Unknown"),
    ],
)
def test_describe_type(type_, name):
    assert describe_type(type_) == name


@pytest.mark.parametrize(
    ("severity", "name"),
    [
        (gldebug.DEBUG_SEVERITY_NOTIFICATION, "NOTIFICATION"),
        (gldebug.DEBUG_SEVERITY_LOW, "LOW"),
        (gldebug.DEBUG_SEVERITY_MEDIUM, "MEDIUM"),
        (gldebug.DEBUG_SEVERITY_HIGH, "HIGH"),
        (2, "Unknown"),
    ],
)
def test_describe_severity(severity, name):
    assert describe_severity(severity) == name


def test_format_message_layout():
    line = format_message(
        gldebug.DEBUG_SOURCE_API,
        gldebug.DEBUG_TYPE_ERROR,
        7,
        gldebug.DEBUG_SEVERITY_HIGH,
        "boom",
    )
    assert line == (
        "[GL CALLBACK]: source = API, type = ERROR, severity = HIGH, "
        "ID = '7', message = 'boom'"
    )


def test_message_callback_decodes_bytes(capsys):
    message_callback(
        gldebug.DEBUG_SOURCE_SHADER_COMPILER,
        gldebug.DEBUG_TYPE_PERFORMANCE,
        3,
        gldebug.DEBUG_SEVERITY_LOW,
        4,
        b"slow",
        None,
    )
    out = capsys.readouterr().out
    assert out.rstrip("\n") == format_message(
        gldebug.DEBUG_SOURCE_SHADER_COMPILER,
        gldebug.DEBUG_TYPE_PERFORMANCE,
        3,
        gldebug.DEBUG_SEVERITY_LOW,
        "slow",
    )


def test_message_callback_accepts_text(capsys):
    message_callback(0, 0, 1, 0, -1, "hello", None)
    out = capsys.readouterr().out
    assert "message = 'hello'" in out
    assert "source = Unknown" in out