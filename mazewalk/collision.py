"""Player collision against wall cells of a grid."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .grid import CELL_EMPTY, CELL_WALL, Grid

__all__ = ["Collision"]


class Collision:
    """Tests a square player footprint of half-size ``radius`` against walls.

    World X maps to grid x and world Z to grid y; cells outside the grid are open.
    """

    def __init__(self, grid: Grid, radius: float = 0.25) -> None:
        self.grid = grid
        self.radius = radius

    def _is_cell_blocked(self, cx: int, cz: int) -> bool:
        return self.grid.get(cx, cz, CELL_EMPTY) == CELL_WALL

    def is_position_blocked(self, pos: Sequence[float]) -> bool:
        """Return True if any corner of the footprint at ``pos`` lies in a wall."""
        x, _, z = pos
        left = math.floor(x - self.radius)
        right = math.floor(x + self.radius)
        top = math.floor(z - self.radius)
        bottom = math.floor(z + self.radius)
        return any(
            self._is_cell_blocked(cx, cz)
            for cx, cz in ((left, top), (left, bottom), (right, top), (right, bottom))
        )

    def movement(self, current: Sequence[float], desired: Sequence[float]) -> np.ndarray:
        """Apply ``desired`` to ``current``, sliding along walls axis by axis."""
        new_pos = np.array(current, dtype=float)
        dx, dy, dz = (float(v) for v in desired)

        step_x = new_pos + (dx, 0.0, 0.0)
        if not self.is_position_blocked(step_x):
            new_pos = step_x

        step_z = new_pos + (0.0, 0.0, dz)
        if not self.is_position_blocked(step_z):
            new_pos = step_z

        new_pos[1] += dy
        return new_pos