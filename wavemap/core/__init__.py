"""Core domain types for wavemap.

This module contains pure value types with no I/O: grid directions and the
tile palette shared by generation, storage and rendering.

Usage:
    from wavemap.core import Direction, TileType
"""

from .types import Direction, IdGrid, in_bounds
from .tiles import (
    TileType,
    TileProperties,
    TILE_DEFAULTS,
    get_colour,
    get_symbol,
    is_visible,
    tile_from_symbol,
)

__all__ = [
    "Direction",
    "IdGrid",
    "in_bounds",
    "TileType",
    "TileProperties",
    "TILE_DEFAULTS",
    "get_colour",
    "get_symbol",
    "is_visible",
    "tile_from_symbol",
]
