"""Game rules independent of the window: layout, lights, input state."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, Sequence, TypeVar

import numpy as np

from . import logger
from .config import Config
from .grid import CELL_END, CELL_START, CELL_WALL, Grid

__all__ = [
    "Action",
    "Placement",
    "TeapotLight",
    "GameState",
    "CursorTracker",
    "build_layout",
    "sun_position",
    "sky_brightness",
    "sun_intensity",
    "teapot_light",
    "sort_back_to_front",
]

T = TypeVar("T")

GROUND_HEIGHT = 1.0
GRAVITY = 9.81
JUMP_VELOCITY = 2.0
FOV_MIN = 30.0
FOV_MAX = 90.0

_SUN_PERIOD = 30.0
_SUN_RADIUS = 60.0
_SUN_HEIGHT = 20.0
_TEAPOT_AMPLITUDE = 0.5
_TEAPOT_SPEED = 1.5
_TEAPOT_BASE_COLOR = np.array([0.2, 0.8, 0.4])


class Action(Enum):
    """A key press the game reacts to."""

    QUIT = auto()
    JUMP = auto()
    TOGGLE_FLASHLIGHT = auto()
    TOGGLE_HUD = auto()
    TOGGLE_FREE_CAM = auto()
    TOGGLE_VSYNC = auto()
    TOGGLE_FULLSCREEN = auto()


@dataclass(frozen=True)
class Placement:
    """Where one maze block goes: ``kind`` is ``"wall"`` or ``"marker"``."""

    name: str
    kind: str
    origin: tuple[float, float, float]
    scale: tuple[float, float, float]


@dataclass
class TeapotLight:
    """A moving point light carried by a teapot."""

    position: np.ndarray
    color: np.ndarray
    specular: tuple[float, float, float] = (1.0, 1.0, 1.0)
    constant: float = 1.0
    linear: float = 0.09
    exponent: float = 0.032
    emissive_radius: float = 2.0


def build_layout(grid: Grid, wall_height: float = 2.0) -> list[Placement]:
    """Blocks for every wall, start and end cell, in row-major order."""
    lift = wall_height - 1.5
    placements = []
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid[x, y]
            origin = (x + 0.5, lift, y + 0.5)
            if cell == CELL_WALL:
                placements.append(
                    Placement(f"wall-{x}-{y}", "wall", origin, (1.0, wall_height, 1.0))
                )
            elif cell in (CELL_START, CELL_END):
                placements.append(Placement(f"tp-{x}-{y}", "marker", origin, (1.0, 5.0, 1.0)))
    return placements


def sun_position(time: float) -> np.ndarray:
    """Sun on its 30-second orbit in the XY plane."""
    angle = (time / _SUN_PERIOD) * 2.0 * math.pi
    return np.array([_SUN_RADIUS * math.cos(angle), _SUN_HEIGHT * math.sin(angle), 0.0])


def sky_brightness(sun_y: float) -> float:
    """Factor applied to the sky colour for a sun at height ``sun_y``."""
    return min(1.0, max(0.15, (sun_y + 5.0) / 10.0))


def sun_intensity(sun_y: float) -> float:
    """Strength of directional sunlight; zero once the sun has set."""
    return min(1.0, max(0.0, sun_y))


def teapot_light(index: int, time: float, origin: Sequence[float]) -> TeapotLight:
    """Bobbing position and pulsing colour of teapot number ``index``."""
    offset = math.sin((time + index * 0.5) * _TEAPOT_SPEED) * _TEAPOT_AMPLITUDE
    intensity = (math.sin(time * 2.0 + index * 0.5) + 1.0) * 0.5
    position = np.array(origin, dtype=float)
    position[1] += offset
    return TeapotLight(position=position, color=_TEAPOT_BASE_COLOR * intensity)


def sort_back_to_front(
    items: Iterable[T], eye: Sequence[float], position: Callable[[T], Sequence[float]]
) -> list[T]:
    """Order transparent items for drawing by distance from ``eye``, nearest first."""
    eye_v = np.asarray(eye, dtype=float)
    return sorted(
        items,
        key=lambda item: float(np.linalg.norm(np.asarray(position(item), dtype=float) - eye_v)),
    )


class GameState:
    """Toggles, field of view and jumping state driven by input."""

    def __init__(self, config: Config | None = None) -> None:
        config = config or Config()
        self.vsync = config.vsync
        self.antialiasing = config.antialiasing
        self.fullscreen = config.fullscreen
        self.free_cam = config.free_cam
        self.flashlight_on = config.flashlight
        self.show_hud = False
        self.is_jumping = False
        self.jump_velocity = 0.0
        self.fov = 60.0

    def press_key(self, key: Action) -> Action | None:
        """Apply a key press.

        Returns the action when the window must act on it too (quit, vsync,
        fullscreen), otherwise None.
        """
        if key is Action.JUMP:
            if not self.free_cam and not self.is_jumping:
                self.is_jumping = True
                self.jump_velocity = JUMP_VELOCITY
        elif key is Action.TOGGLE_FLASHLIGHT:
            self.flashlight_on = not self.flashlight_on
            logger.info(f"Flashlight: {'ON' if self.flashlight_on else 'OFF'}")
        elif key is Action.TOGGLE_HUD:
            self.show_hud = not self.show_hud
        elif key is Action.TOGGLE_FREE_CAM:
            self.free_cam = not self.free_cam
            logger.info(f"FreeCam: {'ON' if self.free_cam else 'OFF'}")
        elif key is Action.TOGGLE_VSYNC:
            self.vsync = not self.vsync
            return key
        else:
            return key
        return None

    def apply_scroll(self, yoffset: float) -> float:
        """Zoom by ``yoffset`` degrees, kept within 30-90; return the new FOV."""
        self.fov = min(FOV_MAX, max(FOV_MIN, self.fov + yoffset))
        return self.fov

    def step_vertical(self, y: float, movement_y: float, delta_time: float) -> float:
        """New camera height after one frame of movement, gravity and jumping."""
        y += movement_y
        if self.free_cam:
            return y
        if not self.is_jumping:
            return GROUND_HEIGHT
        self.jump_velocity -= GRAVITY * delta_time
        y += self.jump_velocity * delta_time
        if y <= GROUND_HEIGHT:
            y = GROUND_HEIGHT
            self.is_jumping = False
            self.jump_velocity = 0.0
        return y


class CursorTracker:
    """Turns absolute cursor positions into per-event offsets."""

    def __init__(self) -> None:
        self._first = True
        self._last_x = 400.0
        self._last_y = 300.0

    def offset(self, x: float, y: float) -> tuple[float, float]:
        """Return (dx, dy) since the last position, with y pointing up."""
        if self._first:
            self._last_x, self._last_y = x, y
            self._first = False
        dx = x - self._last_x
        dy = self._last_y - y
        self._last_x, self._last_y = x, y
        return dx, dy