"""
Map generation using Wave Function Collapse.

This module provides the main entry point for turning a sample map into a
new map of any size: learn the sample's adjacency rules, run the Collapser,
and hand back tile types ready for rendering or saving.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from wavemap.core.tiles import TileType
from .wfc import AdjacencyModel, Collapser, SolveFailed, SolverConfig
from .wfc.solver import CancelFlag

logger = logging.getLogger(__name__)


def build_model(*samples: Sequence[Sequence[TileType]]) -> AdjacencyModel[TileType]:
    """Learn one adjacency model from one or more sample grids."""
    model: AdjacencyModel[TileType] = AdjacencyModel()
    for sample in samples:
        model.learn(sample)
    return model


def generate_map(
    sample: Sequence[Sequence[TileType]],
    width: int,
    height: int,
    seed: int | None = None,
    config: SolverConfig | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
    cancel_event: CancelFlag | None = None,
) -> list[list[TileType]]:
    """
    Generate a map that locally resembles a sample.

    Args:
        sample: Example map, indexed as sample[y][x]
        width: Output width in cells
        height: Output height in cells
        seed: Random seed for reproducibility (None = random)
        config: Backtracking budget and selection strategy
        progress_callback: Optional callback(collapsed_cells, total_cells)
        cancel_event: Optional flag checked before every collapse

    Returns:
        2D list of TileType values, indexed as grid[y][x]

    Raises:
        SolveFailed: If no valid map was found within the retry budget
    """
    model = build_model(sample)
    collapser = Collapser(
        model,
        config=config,
        cancel_event=cancel_event,
        progress_callback=progress_callback,
    )
    result = collapser.run(width, height, seed)

    if not result.solved:
        logger.warning(f"Map generation failed: {result.reason}")
        raise SolveFailed(result.reason or "unknown", result.attempts)

    return [list(row) for row in result.require_solved()]
