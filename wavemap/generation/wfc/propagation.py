"""
Constraint propagation for Wave Function Collapse.

When a cell loses possibilities, its neighbours may lose theirs too: a
neighbour can only keep tiles that at least one remaining tile of the cell
allows in that direction. Those losses ripple outward until nothing changes
(a fixpoint) or some cell runs out of tiles (a contradiction).
"""

from __future__ import annotations

from collections import deque
import logging
from typing import Iterable

from .adjacency import AdjacencyModel
from .wave import Wave

logger = logging.getLogger(__name__)


class PropagationEngine:
    """
    Worklist propagation of adjacency constraints over a Wave.

    The engine holds no wave state of its own; every call receives the wave
    it works on.
    """

    def __init__(self, model: AdjacencyModel):
        self.model = model

        # Cells changed by the last call (for visualization/debugging)
        self.last_propagated: set[tuple[int, int]] = set()

    def propagate(self, wave: Wave, origin: tuple[int, int]) -> int:
        """
        Propagate constraints outward from a cell whose possibilities shrank.

        Returns the number of restrictions that removed at least one tile.

        Raises:
            Contradiction: As soon as any cell is emptied. The rest of the
                           worklist is abandoned and the wave must be
                           discarded or restored by the caller.
        """
        return self._run(wave, [origin])

    def propagate_all(self, wave: Wave) -> int:
        """
        Propagate from every cell at once.

        Brings a fresh wave to a consistent state before the first collapse,
        e.g. ruling out tiles that were never observed with a neighbour in
        some direction.
        """
        return self._run(wave, wave.positions())

    def _run(self, wave: Wave, start: Iterable[tuple[int, int]]) -> int:
        self.last_propagated.clear()

        queue: deque[tuple[int, int]] = deque(start)
        in_queue: set[tuple[int, int]] = set(queue)
        restrictions = 0

        while queue:
            x, y = queue.popleft()
            in_queue.discard((x, y))
            possibilities = wave.possibilities_at(x, y)

            for nx, ny, direction in wave.neighbors(x, y):
                allowed = self.model.compatible(possibilities, direction)
                if not wave.restrict(nx, ny, allowed):
                    continue

                restrictions += 1
                self.last_propagated.add((nx, ny))
                if (nx, ny) not in in_queue:
                    queue.append((nx, ny))
                    in_queue.add((nx, ny))

        logger.debug(f"Propagation settled after {restrictions} restriction(s)")
        return restrictions
