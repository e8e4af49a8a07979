"""Tile palette for wavemap.

Defines the tile types a map can be made of, along with their display
properties. The solver itself only sees integer tile ids; these types are
what the catalog maps those ids back to.
"""

from __future__ import annotations

from enum import Enum
from typing import TypedDict


class TileType(Enum):
    """Types of tile in a map."""

    EMPTY = "empty"
    MOUNTAIN = "mountain"
    LAND = "land"
    COAST = "coast"
    WATER = "water"


class TileProperties(TypedDict):
    """Display properties for a tile type."""

    colour: tuple[float, float, float, float]  # RGBA, 0.0-1.0
    symbol: str
    visible: bool


TILE_DEFAULTS: dict[TileType, TileProperties] = {
    TileType.EMPTY: {
        "colour": (0.0, 0.0, 0.0, 0.0),  # Fully transparent
        "symbol": " ",
        "visible": False,
    },
    TileType.MOUNTAIN: {
        "colour": (0.5, 0.5, 0.5, 1.0),
        "symbol": "^",
        "visible": True,
    },
    TileType.LAND: {
        "colour": (0.8, 0.7, 0.6, 1.0),
        "symbol": ".",
        "visible": True,
    },
    TileType.COAST: {
        "colour": (0.9, 0.85, 0.5, 1.0),
        "symbol": ":",
        "visible": True,
    },
    TileType.WATER: {
        "colour": (0.2, 0.4, 0.8, 1.0),
        "symbol": "~",
        "visible": True,
    },
}

_SYMBOL_TO_TILE: dict[str, TileType] = {
    props["symbol"]: tile for tile, props in TILE_DEFAULTS.items()
}


def get_colour(tile: TileType) -> tuple[float, float, float, float]:
    """Get the RGBA display colour for a tile type."""
    return TILE_DEFAULTS[tile]["colour"]


def get_symbol(tile: TileType) -> str:
    """Get the single-character symbol for a tile type."""
    return TILE_DEFAULTS[tile]["symbol"]


def is_visible(tile: TileType) -> bool:
    """Check if a tile type is drawn at all (EMPTY is transparent)."""
    return TILE_DEFAULTS[tile]["visible"]


def tile_from_symbol(symbol: str) -> TileType:
    """Look up the tile type for a symbol.

    Raises:
        KeyError: If no tile type uses the symbol
    """
    try:
        return _SYMBOL_TO_TILE[symbol]
    except KeyError:
        raise KeyError(f"Unknown tile symbol: {symbol!r}") from None
