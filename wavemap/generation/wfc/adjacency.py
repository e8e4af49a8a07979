"""
Adjacency model for Wave Function Collapse.

The model is learned from example grids: every pair of tiles seen side by
side in a sample becomes a rule saying those tiles may be neighbours in that
direction. These local rules are all the solver knows, and they are enough
to reproduce the large-scale structure of the sample.

Rules are stored as a set of facts, so learning the same sample twice adds
nothing, and every fact is recorded together with its mirror image.
"""

from __future__ import annotations

import logging
from typing import Generic, Hashable, Iterable, Sequence, TypeVar

from wavemap.core.types import Direction, in_bounds
from .catalog import TileCatalog

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class AdjacencyModel(Generic[T]):
    """
    Which tile ids may legally sit next to which others, per direction.

    Attributes:
        catalog: The TileCatalog that assigned the ids used in the rules.
                 A fresh catalog is created when none is given.
    """

    def __init__(self, catalog: TileCatalog[T] | None = None):
        self.catalog: TileCatalog[T] = catalog if catalog is not None else TileCatalog()
        self._rules: dict[Direction, dict[int, set[int]]] = {d: {} for d in Direction}
        self._counts: list[int] = []

    @property
    def tile_count(self) -> int:
        return self.catalog.count()

    def _ensure_counts(self) -> None:
        missing = self.catalog.count() - len(self._counts)
        if missing > 0:
            self._counts.extend([0] * missing)

    def learn(self, sample_grid: Sequence[Sequence[T]]) -> None:
        """
        Record every adjacency observed in a sample grid.

        The grid is a list of rows (sample_grid[y][x]). Cells on the border
        contribute no facts for directions that leave the grid.

        Raises:
            ValueError: If the rows are not all the same length
        """
        height = len(sample_grid)
        width = len(sample_grid[0]) if height else 0
        if any(len(row) != width for row in sample_grid):
            raise ValueError("Sample grid rows must all have the same length")

        # Register in row-major order so ids are deterministic
        ids = [[self.catalog.register(tile) for tile in row] for row in sample_grid]
        self._ensure_counts()

        facts_before = self.fact_count()
        for y in range(height):
            for x in range(width):
                tile_id = ids[y][x]
                self._counts[tile_id] += 1
                for direction in Direction:
                    nx, ny = x + direction.dx, y + direction.dy
                    if in_bounds(nx, ny, width, height):
                        self.allow(tile_id, direction, ids[ny][nx])

        logger.debug(
            f"Learned {width}x{height} sample: {self.fact_count() - facts_before} new facts, "
            f"{self.tile_count} tiles"
        )

    def allow(self, tile_id: int, direction: Direction, neighbor_id: int) -> None:
        """
        Allow neighbor_id to sit in `direction` of tile_id.

        The mirror fact (tile_id in the opposite direction of neighbor_id)
        is recorded at the same time.
        """
        # Raises UnknownTileId for ids the catalog never assigned
        self.catalog.resolve(tile_id)
        self.catalog.resolve(neighbor_id)
        self._rules[direction].setdefault(tile_id, set()).add(neighbor_id)
        self._rules[direction.opposite()].setdefault(neighbor_id, set()).add(tile_id)

    def allow_all_directions(self, tile_a: T, tile_b: T) -> None:
        """
        Let two tile types be neighbours in every direction.

        Convenience for hand-written rule sets; registers both types.
        """
        a = self.catalog.register(tile_a)
        b = self.catalog.register(tile_b)
        self._ensure_counts()
        for direction in Direction:
            self.allow(a, direction, b)

    def allows(self, tile_id: int, direction: Direction, candidate_id: int) -> bool:
        """Was candidate_id ever seen in `direction` of tile_id?"""
        return candidate_id in self._rules[direction].get(tile_id, ())

    def allowed_neighbors(self, tile_id: int, direction: Direction) -> frozenset[int]:
        """Get all tile ids allowed in the given direction of tile_id."""
        return frozenset(self._rules[direction].get(tile_id, ()))

    def compatible(self, tile_ids: Iterable[int], direction: Direction) -> set[int]:
        """
        Union of allowed neighbours over several tiles.

        This is what a neighbouring cell can still be while the cell in
        question could be any of tile_ids.
        """
        rules = self._rules[direction]
        allowed: set[int] = set()
        for tile_id in tile_ids:
            neighbors = rules.get(tile_id)
            if neighbors:
                allowed |= neighbors
        return allowed

    def frequency(self, tile_id: int) -> float:
        """
        Relative occurrence of a tile across all learned samples.

        Tiles that were only added through hand-written rules count as
        uniformly likely when nothing has been learned.
        """
        self.catalog.resolve(tile_id)
        self._ensure_counts()
        total = sum(self._counts)
        if total == 0:
            return 1.0 / self.tile_count
        return self._counts[tile_id] / total

    def weights(self) -> list[float]:
        """Frequencies for every tile, indexed by id."""
        return [self.frequency(tile_id) for tile_id in range(self.tile_count)]

    def fact_count(self) -> int:
        """Number of distinct (tile, direction, neighbour) facts."""
        return sum(len(neighbors) for rules in self._rules.values() for neighbors in rules.values())
