"""Tests for TileCatalog."""

import pytest

from wavemap.core.tiles import TileType
from wavemap.generation.wfc import TileCatalog, UnknownTileId, UnknownTileType


class TestRegister:
    """Tests for assigning ids."""

    def test_ids_are_contiguous_from_zero(self):
        catalog = TileCatalog()
        ids = [catalog.register(t) for t in (TileType.WATER, TileType.LAND, TileType.MOUNTAIN)]
        assert ids == [0, 1, 2]
        assert catalog.count() == 3

    def test_registering_again_returns_existing_id(self):
        catalog = TileCatalog()
        first = catalog.register(TileType.COAST)
        catalog.register(TileType.LAND)
        assert catalog.register(TileType.COAST) == first
        assert len(catalog) == 2

    def test_order_decides_ids(self):
        a, b = TileCatalog(), TileCatalog()
        a.register(TileType.LAND)
        a.register(TileType.WATER)
        b.register(TileType.WATER)
        b.register(TileType.LAND)
        assert a.id_of(TileType.LAND) == 0
        assert b.id_of(TileType.LAND) == 1


class TestResolve:
    """Tests for looking tile types back up."""

    def test_resolve_is_inverse_of_register(self):
        catalog = TileCatalog()
        for tile in TileType:
            assert catalog.resolve(catalog.register(tile)) == tile

    def test_unknown_id(self):
        catalog = TileCatalog()
        catalog.register(TileType.LAND)
        with pytest.raises(UnknownTileId) as exc_info:
            catalog.resolve(1)
        assert exc_info.value.tile_id == 1

    def test_negative_id_is_unknown(self):
        catalog = TileCatalog()
        catalog.register(TileType.LAND)
        with pytest.raises(UnknownTileId):
            catalog.resolve(-1)

    def test_empty_catalog(self):
        with pytest.raises(UnknownTileId):
            TileCatalog().resolve(0)

    def test_id_of_unregistered_type(self):
        catalog = TileCatalog()
        with pytest.raises(UnknownTileType):
            catalog.id_of(TileType.WATER)
        assert TileType.WATER not in catalog
        assert catalog.count() == 0

    def test_tile_types_indexed_by_id(self):
        catalog = TileCatalog()
        catalog.register("b")
        catalog.register("a")
        assert catalog.tile_types() == ["b", "a"]
