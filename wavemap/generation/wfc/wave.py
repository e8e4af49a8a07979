"""
Wave representation for Wave Function Collapse.

The Wave is the solver state: a 2D array of cells where each cell is in
superposition (several possible tiles) until it is committed to exactly one.

Cells are addressed as (x, y) = (column, row) and stored row-major, so the
cell at (x, y) lives in cells[y][x]. No other convention exists anywhere in
the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import AbstractSet, Iterator, Sequence

from wavemap.core.types import Direction, IdGrid, in_bounds
from .errors import Contradiction, InvalidForce, WFCError


@dataclass
class SuperpositionState:
    """
    A single cell of the wave.

    Before collapse: holds the set of tile ids still possible.
    After collapse: holds exactly one tile id, and collapsed is True.

    A cell whose set shrinks to one tile through propagation is not yet
    collapsed; that only happens when the solver commits to it.
    """
    possible_tiles: set[int] = field(default_factory=set)
    collapsed: bool = False
    entropy: float = 0.0


@dataclass(frozen=True)
class WaveCheckpoint:
    """Full copy of every cell, used to roll a wave back after a contradiction."""
    cells: tuple[tuple[frozenset[int], bool], ...]
    collapsed_count: int


class Wave:
    """
    The 2D grid of superposition states being solved.

    Initially every cell can be any tile. Possibility sets only ever shrink,
    through restrict() (propagation) and force() (collapse).
    """

    def __init__(
        self,
        width: int,
        height: int,
        tile_count: int,
        weights: Sequence[float] | None = None,
    ):
        """
        Create a wave with every cell in maximum superposition.

        Args:
            width: Number of columns
            height: Number of rows
            tile_count: Number of tile ids; every cell starts as {0..tile_count-1}
            weights: Optional per-tile frequency weights, indexed by tile id.
                     When given, entropy is weighted by them; otherwise it is
                     the plain possibility count.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Wave dimensions must be non-negative, got {width}x{height}")
        if weights is not None and len(weights) != tile_count:
            raise ValueError(f"Expected {tile_count} weights, got {len(weights)}")

        self.width = width
        self.height = height
        self.tile_count = tile_count
        self._weights = list(weights) if weights is not None else None
        self._collapsed_count = 0

        full = set(range(tile_count))
        full_entropy = self._entropy(full)
        self.cells: list[list[SuperpositionState]] = [
            [
                SuperpositionState(possible_tiles=set(full), entropy=full_entropy)
                for _ in range(width)
            ]
            for _ in range(height)
        ]

    @property
    def collapsed_count(self) -> int:
        """Number of cells committed by force()."""
        return self._collapsed_count

    @property
    def size(self) -> int:
        return self.width * self.height

    def _entropy(self, tiles: AbstractSet[int]) -> float:
        """
        Uncertainty of a possibility set. Lower = more constrained.

        Unweighted, this is the set size. Weighted, it is (n - 1) plus the
        Shannon entropy of the remaining weights normalised to [0, 1], which
        keeps it between n - 1 and n: removing a tile can never raise it, and
        cells of equal size are ordered by how lopsided their weights are.
        """
        n = len(tiles)
        if self._weights is None or n <= 1:
            return float(n)

        weights = [self._weights[t] for t in tiles if self._weights[t] > 0]
        total = sum(weights)
        if total <= 0:
            return float(n)

        shannon = -sum((w / total) * math.log(w / total) for w in weights)
        return (n - 1) + shannon / math.log(n)

    def _cell(self, x: int, y: int) -> SuperpositionState:
        if not in_bounds(x, y, self.width, self.height):
            raise IndexError(f"Cell ({x}, {y}) is outside the {self.width}x{self.height} wave")
        return self.cells[y][x]

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.width, self.height)

    def possibilities_at(self, x: int, y: int) -> frozenset[int]:
        return frozenset(self._cell(x, y).possible_tiles)

    def collapse_value_at(self, x: int, y: int) -> int | None:
        """The committed tile id, or None if the cell is not collapsed yet."""
        cell = self._cell(x, y)
        if cell.collapsed:
            return next(iter(cell.possible_tiles))
        return None

    def entropy_at(self, x: int, y: int) -> float:
        return self._cell(x, y).entropy

    def is_collapsed(self, x: int, y: int) -> bool:
        return self._cell(x, y).collapsed

    def restrict(self, x: int, y: int, allowed: AbstractSet[int]) -> bool:
        """
        Intersect a cell's possibilities with `allowed`.

        Returns True if the cell actually lost possibilities.

        Raises:
            Contradiction: If no possibility survives. The cell is left empty
                           and the wave must be discarded or restored.
        """
        cell = self._cell(x, y)
        old_count = len(cell.possible_tiles)
        cell.possible_tiles &= allowed
        if len(cell.possible_tiles) == old_count:
            return False

        cell.entropy = self._entropy(cell.possible_tiles)
        if not cell.possible_tiles:
            raise Contradiction(x, y)
        return True

    def force(self, x: int, y: int, tile_id: int) -> None:
        """
        Commit a cell to a single tile.

        Raises:
            InvalidForce: If tile_id is not one of the cell's remaining possibilities
        """
        cell = self._cell(x, y)
        if tile_id not in cell.possible_tiles:
            raise InvalidForce(x, y, tile_id)

        cell.possible_tiles = {tile_id}
        cell.entropy = self._entropy(cell.possible_tiles)
        if not cell.collapsed:
            cell.collapsed = True
            self._collapsed_count += 1

    def neighbors(self, x: int, y: int) -> Iterator[tuple[int, int, Direction]]:
        """
        Yield all in-bounds neighbours of a cell with their directions.

        Direction is FROM (x, y) TO the neighbour.
        e.g. (x, y - 1, Direction.UP) means the neighbour is above.
        """
        for direction in Direction:
            nx = x + direction.dx
            ny = y + direction.dy
            if in_bounds(nx, ny, self.width, self.height):
                yield nx, ny, direction

    def positions(self) -> Iterator[tuple[int, int]]:
        """Iterate over every (x, y) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def min_entropy_cell(self) -> tuple[int, int] | None:
        """
        Find the uncollapsed cell with minimum entropy.

        Ties go to the first cell in row-major order, so selection is
        reproducible. Returns None if every cell is collapsed.
        """
        best: tuple[int, int] | None = None
        best_entropy = math.inf

        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell.collapsed:
                    continue
                if cell.entropy < best_entropy:
                    best_entropy = cell.entropy
                    best = (x, y)

        return best

    def is_solved(self) -> bool:
        """Check if every cell has been collapsed."""
        return self._collapsed_count == self.size

    def checkpoint(self) -> WaveCheckpoint:
        """Copy the current state of every cell."""
        return WaveCheckpoint(
            cells=tuple(
                (frozenset(cell.possible_tiles), cell.collapsed)
                for row in self.cells
                for cell in row
            ),
            collapsed_count=self._collapsed_count,
        )

    def restore(self, checkpoint: WaveCheckpoint) -> None:
        """Overwrite every cell with a checkpoint taken from this wave."""
        if len(checkpoint.cells) != self.size:
            raise WFCError("Checkpoint does not match wave dimensions")

        for index, (tiles, collapsed) in enumerate(checkpoint.cells):
            cell = self.cells[index // self.width][index % self.width]
            cell.possible_tiles = set(tiles)
            cell.collapsed = collapsed
            cell.entropy = self._entropy(cell.possible_tiles)
        self._collapsed_count = checkpoint.collapsed_count

    def to_grid(self) -> IdGrid:
        """
        Read the committed tile of every cell, as grid[y][x].

        Raises:
            WFCError: If any cell is not collapsed
        """
        if not self.is_solved():
            raise WFCError(
                f"Wave is not solved: {self.size - self._collapsed_count} cell(s) still open"
            )
        return [
            [next(iter(cell.possible_tiles)) for cell in row]
            for row in self.cells
        ]
