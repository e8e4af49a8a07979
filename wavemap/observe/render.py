"""Rendering helpers for generated maps.

Two views of the same grid:
- render_text(): a rich Text block, one symbol per cell, for terminals
- tile_rects(): filled rectangles in pixel space for any 2D drawing backend

Both read grid[y][x]; cell (x, y) is drawn at (x * tile_size, y * tile_size).
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from rich.text import Text

from wavemap.core.tiles import TileType, get_colour, get_symbol, is_visible


class TileRect(NamedTuple):
    """A filled square to draw for one visible cell."""

    x: int
    y: int
    size: int
    colour: tuple[float, float, float, float]


def tile_style(tile: TileType) -> str:
    """Get a rich colour style for a tile type (empty for invisible tiles)."""
    if not is_visible(tile):
        return ""
    r, g, b, _ = get_colour(tile)
    return f"rgb({round(r * 255)},{round(g * 255)},{round(b * 255)})"


def render_text(grid: Sequence[Sequence[TileType]]) -> Text:
    """Render a tile grid as coloured symbols, one line per row."""
    text = Text()
    for y, row in enumerate(grid):
        if y:
            text.append("\n")
        for tile in row:
            text.append(get_symbol(tile), style=tile_style(tile))
    return text


def tile_rects(grid: Sequence[Sequence[TileType]], tile_size: int) -> list[TileRect]:
    """
    Lay out a tile grid as pixel rectangles, skipping invisible tiles.

    Raises:
        ValueError: If tile_size is not positive
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")

    return [
        TileRect(x * tile_size, y * tile_size, tile_size, get_colour(tile))
        for y, row in enumerate(grid)
        for x, tile in enumerate(row)
        if is_visible(tile)
    ]
