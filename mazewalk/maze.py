"""Maze generation by recursive division."""

from __future__ import annotations

import random
from enum import Enum, auto

from .grid import CELL_EMPTY, CELL_END, CELL_PASSAGE, CELL_START, CELL_WALL, Grid

__all__ = ["MazeGenerator"]


class _Orientation(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


class MazeGenerator:
    """Builds a walled maze on a :class:`Grid` by recursive division.

    Row and column counts are rounded up to odd numbers; the grid passed
    to :meth:`generate` must be at least ``cols`` x ``rows`` in size.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        corridor_width: int = 2,
        seed: int | None = None,
    ) -> None:
        self.rows = rows + 1 if rows % 2 == 0 else rows
        self.cols = cols + 1 if cols % 2 == 0 else cols
        self.corridor = max(1, corridor_width)
        self._rng = random.Random(seed)

    def generate(self, grid: Grid) -> tuple[tuple[int, int], tuple[int, int]]:
        """Carve a maze into ``grid`` and return its ``(start, end)`` cells as (x, y)."""
        grid.fill(CELL_EMPTY)

        for x in range(self.cols):
            grid.set(x, 0, CELL_WALL)
            grid.set(x, self.rows - 1, CELL_WALL)
        for y in range(self.rows):
            grid.set(0, y, CELL_WALL)
            grid.set(self.cols - 1, y, CELL_WALL)

        inner_w, inner_h = self.cols - 2, self.rows - 2
        self._divide(grid, 1, 1, inner_w, inner_h, self._choose_orientation(inner_w, inner_h))

        start = self._pick_open_cell(grid)
        end = self._pick_open_cell(grid)
        while end == start:
            end = self._pick_open_cell(grid)

        grid.set(*end, CELL_END)
        grid.set(*start, CELL_START)
        return start, end

    def _pick_open_cell(self, grid: Grid) -> tuple[int, int]:
        while True:
            cell = (
                self._rng.randint(1, self.cols - 2),
                self._rng.randint(1, self.rows - 2),
            )
            if grid.get(*cell, CELL_WALL) != CELL_WALL:
                return cell

    def _divide(
        self,
        grid: Grid,
        x: int,
        y: int,
        width: int,
        height: int,
        orientation: _Orientation,
    ) -> None:
        c = self.corridor
        if width < c * 2 + 1 or height < c * 2 + 1:
            return

        if orientation is _Orientation.VERTICAL:
            wall_x = self._rng.randint(x + c, x + width - c - 1)
            for row in range(y, y + height):
                grid[wall_x, row] = CELL_WALL
            gap_y = self._rng.randint(y, y + height - c)
            for dy in range(c):
                grid[wall_x, gap_y + dy] = CELL_PASSAGE

            left_w = wall_x - x
            right_w = x + width - wall_x - 1
            self._divide(grid, x, y, left_w, height, self._choose_orientation(left_w, height))
            self._divide(
                grid, wall_x + 1, y, right_w, height, self._choose_orientation(right_w, height)
            )
        else:
            wall_y = self._rng.randint(y + c, y + height - c - 1)
            for col in range(x, x + width):
                grid[col, wall_y] = CELL_WALL
            gap_x = self._rng.randint(x, x + width - c)
            for dx in range(c):
                grid[gap_x + dx, wall_y] = CELL_PASSAGE

            top_h = wall_y - y
            bottom_h = y + height - wall_y - 1
            self._divide(grid, x, y, width, top_h, self._choose_orientation(width, top_h))
            self._divide(
                grid, x, wall_y + 1, width, bottom_h, self._choose_orientation(width, bottom_h)
            )

    def _choose_orientation(self, width: int, height: int) -> _Orientation:
        if width < height:
            return _Orientation.HORIZONTAL
        if height < width:
            return _Orientation.VERTICAL
        return _Orientation.HORIZONTAL if self._rng.randint(0, 1) else _Orientation.VERTICAL