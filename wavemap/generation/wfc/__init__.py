"""Wave Function Collapse engine for tile map generation."""

from .catalog import TileCatalog
from .adjacency import AdjacencyModel
from .wave import Wave, SuperpositionState, WaveCheckpoint
from .propagation import PropagationEngine
from .solver import Collapser, SolverState, SolveResult
from .config import SolverConfig, SelectionStrategy
from .errors import (
    WFCError,
    UnknownTileId,
    UnknownTileType,
    InvalidForce,
    Contradiction,
    SolveFailed,
)

__all__ = [
    "TileCatalog",
    "AdjacencyModel",
    "Wave",
    "SuperpositionState",
    "WaveCheckpoint",
    "PropagationEngine",
    "Collapser",
    "SolverState",
    "SolveResult",
    "SolverConfig",
    "SelectionStrategy",
    "WFCError",
    "UnknownTileId",
    "UnknownTileType",
    "InvalidForce",
    "Contradiction",
    "SolveFailed",
]
