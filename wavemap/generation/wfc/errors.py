"""Exceptions raised by the Wave Function Collapse engine.

Catalog and wave misuse (UnknownTileId, UnknownTileType, InvalidForce) are
programming errors and are never caught inside the engine. Contradiction is an
expected outcome of propagation and is recovered by the solver. SolveFailed is
the terminal outcome of a run that could not produce a valid grid.
"""


class WFCError(Exception):
    """Base exception for WFC engine errors."""

    pass


class UnknownTileId(WFCError):
    """A tile id was resolved that the catalog never assigned."""

    def __init__(self, tile_id: int):
        super().__init__(f"Unknown tile id: {tile_id}")
        self.tile_id = tile_id


class UnknownTileType(WFCError):
    """A tile type was looked up that the catalog never registered."""

    def __init__(self, tile_type: object):
        super().__init__(f"Unknown tile type: {tile_type!r}")
        self.tile_type = tile_type


class InvalidForce(WFCError):
    """A cell was forced to a tile that is no longer possible there."""

    def __init__(self, x: int, y: int, tile_id: int):
        super().__init__(f"Cannot force cell ({x}, {y}) to tile {tile_id}: not a remaining possibility")
        self.x = x
        self.y = y
        self.tile_id = tile_id


class Contradiction(WFCError):
    """A cell's possibility set became empty."""

    def __init__(self, x: int, y: int):
        super().__init__(f"Contradiction at cell ({x}, {y})")
        self.x = x
        self.y = y


class SolveFailed(WFCError):
    """The solver could not produce a complete, contradiction-free grid."""

    def __init__(self, reason: str, attempts: int = 0):
        super().__init__(f"Solve failed after {attempts} attempt(s): {reason}")
        self.reason = reason
        self.attempts = attempts
