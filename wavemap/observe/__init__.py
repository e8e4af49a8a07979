"""Views of generated maps."""

from .render import TileRect, render_text, tile_rects, tile_style

__all__ = ["TileRect", "render_text", "tile_rects", "tile_style"]
