"""
Tile catalog: a two-way table between tile types and dense integer ids.

The solver works on small integers so possibility sets stay cheap to copy
and compare. Ids are handed out in registration order starting at 0 and are
never reused.
"""

from __future__ import annotations

from typing import Generic, Hashable, TypeVar

from .errors import UnknownTileId, UnknownTileType

T = TypeVar("T", bound=Hashable)


class TileCatalog(Generic[T]):
    """Assigns stable ids to tile types and resolves them back."""

    def __init__(self):
        self._ids: dict[T, int] = {}
        self._types: list[T] = []

    def register(self, tile_type: T) -> int:
        """Return the id for a tile type, assigning the next free id on first sight."""
        tile_id = self._ids.get(tile_type)
        if tile_id is None:
            tile_id = len(self._types)
            self._ids[tile_type] = tile_id
            self._types.append(tile_type)
        return tile_id

    def resolve(self, tile_id: int) -> T:
        """Get the tile type for an id. Raises UnknownTileId if never assigned."""
        if not 0 <= tile_id < len(self._types):
            raise UnknownTileId(tile_id)
        return self._types[tile_id]

    def id_of(self, tile_type: T) -> int:
        """Get the id of an already-registered tile type without registering it."""
        try:
            return self._ids[tile_type]
        except KeyError:
            raise UnknownTileType(tile_type) from None

    def count(self) -> int:
        return len(self._types)

    def tile_types(self) -> list[T]:
        """All registered tile types, indexed by id."""
        return list(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, tile_type: object) -> bool:
        return tile_type in self._ids
