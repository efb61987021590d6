"""Reading the JSON settings file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from . import logger

__all__ = ["Config", "load_config"]


@dataclass
class Config:
    """Start-up settings; the defaults apply when no settings file exists."""

    antialiasing: bool = False
    vsync: bool = True
    fullscreen: bool = False
    free_cam: bool = False
    flashlight: bool = False
    window_width: int = 800
    window_height: int = 600


# (attribute, JSON key, value used when the key is absent, expected kind)
_FIELDS = (
    ("antialiasing", "antialiasing", False, bool),
    ("vsync", "vsync", False, bool),
    ("fullscreen", "fullscreen", False, bool),
    ("free_cam", "free_cam", False, bool),
    ("flashlight", "flashlight", False, bool),
    ("window_width", "window_width", 800, int),
    ("window_height", "window_height", 600, int),
)


def _convert(value: Any, kind: type) -> Any:
    if kind is bool:
        if not isinstance(value, bool):
            raise TypeError(f"expected a boolean, got {value!r}")
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    raise TypeError(f"expected a number, got {value!r}")


def load_config(path: str | os.PathLike = "config.json") -> Config:
    """Read settings from ``path``.

    A missing file gives the defaults. Keys absent from the file fall back to
    off, 800 and 600. An invalid file is reported and the settings read
    before the fault are kept.
    """
    config = Config()
    try:
        handle = open(path, encoding="utf-8")
    except OSError:
        logger.error(f"Cannot open {os.path.basename(os.fspath(path))}. Using defaults.")
        return config

    with handle:
        try:
            data = json.load(handle)
            if not isinstance(data, dict):
                raise TypeError("top level is not an object")
            for attribute, key, absent, kind in _FIELDS:
                value = data[key] if key in data else absent
                setattr(config, attribute, _convert(value, kind))
        except (ValueError, TypeError):
            logger.error(f"Invalid {os.path.basename(os.fspath(path))}")
    return config