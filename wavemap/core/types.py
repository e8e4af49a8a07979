"""Foundational types for wavemap.

Coordinates follow screen orientation everywhere in the package:
- x is the column and increases to the right
- y is the row and increases downward
- grids are lists of rows, so a cell is addressed as grid[y][x]
"""

from __future__ import annotations

from enum import Enum

# A 2D grid of tile identifiers, indexed as grid[y][x]
IdGrid = list[list[int]]


class Direction(Enum):
    """
    Cardinal directions for adjacency rules.

    The opposite() method is what keeps learned rules symmetric:
    if tile A allows tile B below it, then tile B must allow A above it.
    """
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def opposite(self) -> Direction:
        """Return the opposite direction."""
        return _OPPOSITES[self]

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    """Check if (x, y) lies inside a width x height grid."""
    return 0 <= x < width and 0 <= y < height
