"""First-person camera driven by movement keys and mouse offsets."""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Collection, Sequence

import numpy as np

from .transforms import look_at, normalize

__all__ = ["MoveKey", "Camera"]

_WORLD_UP = np.array([0.0, 1.0, 0.0])


class MoveKey(Enum):
    """Logical movement inputs read by :meth:`Camera.handle_input`."""

    FORWARD = auto()
    BACKWARD = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    SPRINT = auto()


class Camera:
    """A yaw/pitch camera with a local front, right and up basis."""

    def __init__(self, position: Sequence[float]) -> None:
        self.position = np.array(position, dtype=float)
        self.yaw = -90.0
        self.pitch = 0.0
        self.roll = 0.0
        self.movement_speed = 1.0
        self.mouse_sensitivity = 0.25
        self.front = np.zeros(3)
        self.right = np.zeros(3)
        self.up = _WORLD_UP.copy()
        self._update_vectors()

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix looking along ``front`` from ``position``."""
        return look_at(self.position, self.position + self.front, self.up)

    def handle_input(self, pressed: Collection[MoveKey], delta_time: float) -> np.ndarray:
        """Return the displacement for this frame given the pressed keys."""
        direction = np.zeros(3)
        if MoveKey.FORWARD in pressed:
            direction += self.front
        if MoveKey.BACKWARD in pressed:
            direction -= self.front
        if MoveKey.LEFT in pressed:
            direction -= self.right
        if MoveKey.RIGHT in pressed:
            direction += self.right
        if MoveKey.UP in pressed:
            direction += self.up
        if MoveKey.DOWN in pressed:
            direction -= self.up
        self.movement_speed = 2.0 if MoveKey.SPRINT in pressed else 1.0

        if np.linalg.norm(direction) < 1e-5:
            return np.zeros(3)
        return normalize(direction) * self.movement_speed * delta_time

    def handle_mouse(
        self, xoffset: float, yoffset: float, constrain_pitch: bool = True
    ) -> None:
        """Turn the camera by mouse offsets, optionally clamping pitch to ±89°."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(89.0, max(-89.0, self.pitch))
        self._update_vectors()

    def _update_vectors(self) -> None:
        yaw, pitch = math.radians(self.yaw), math.radians(self.pitch)
        front = np.array(
            [
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            ]
        )
        self.front = normalize(front)
        self.right = normalize(np.cross(self.front, _WORLD_UP))
        self.up = normalize(np.cross(self.right, self.front))