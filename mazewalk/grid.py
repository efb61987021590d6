"""A fixed-size two-dimensional grid of byte-valued cells."""

from __future__ import annotations

__all__ = [
    "CELL_WALL",
    "CELL_EMPTY",
    "CELL_END",
    "CELL_START",
    "CELL_PASSAGE",
    "Grid",
]

CELL_WALL = ord("#")
CELL_EMPTY = 0
CELL_END = ord("e")
CELL_START = ord("s")
CELL_PASSAGE = ord(".")


class Grid:
    """A ``width`` x ``height`` grid of cells, each an integer 0-255.

    Cells are addressed as ``grid[x, y]``; indexing out of bounds raises
    :class:`IndexError`, whereas :meth:`get` and :meth:`set` tolerate it.
    """

    def __init__(self, width: int, height: int, fill: int = CELL_PASSAGE) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid: invalid size")
        self.width = width
        self.height = height
        self._cells = bytearray([fill]) * (width * height)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        if not self._contains(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def __getitem__(self, key: tuple[int, int]) -> int:
        x, y = key
        return self._cells[self._offset(x, y)]

    def __setitem__(self, key: tuple[int, int], value: int) -> None:
        x, y = key
        self._cells[self._offset(x, y)] = value

    def get(self, x: int, y: int, fallback: int) -> int:
        """Return the cell at (x, y), or ``fallback`` when outside the grid."""
        if not self._contains(x, y):
            return fallback
        return self._cells[y * self.width + x]

    def set(self, x: int, y: int, value: int) -> None:
        """Set the cell at (x, y); positions outside the grid are ignored."""
        if self._contains(x, y):
            self._cells[y * self.width + x] = value

    def fill(self, value: int) -> None:
        """Set every cell to ``value``."""
        self._cells[:] = bytes([value]) * len(self._cells)