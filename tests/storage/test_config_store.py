"""Tests for wavemap.storage.config_store module."""

import json

import pytest
from pydantic import ValidationError

from wavemap.core.tiles import TileType
from wavemap.generation.wfc import SelectionStrategy, SolverConfig
from wavemap.storage import (
    MapConfiguration,
    MapConfigStore,
    MapConfigStoreError,
    MapConfigNotFoundError,
)


@pytest.fixture
def store(temp_data_dir) -> MapConfigStore:
    return MapConfigStore(temp_data_dir / "maps.json")


@pytest.fixture
def board(checkerboard_sample) -> MapConfiguration:
    return MapConfiguration(
        name="board",
        sample=checkerboard_sample,
        width=4,
        height=4,
        seed=7,
        solver=SolverConfig(selection=SelectionStrategy.UNIFORM, max_backtracks=4),
    )


class TestMapConfiguration:
    """Tests for the MapConfiguration model."""

    def test_sample_is_stored_as_tuples(self, board):
        assert isinstance(board.sample, tuple)
        assert board.sample[0] == (TileType.LAND, TileType.WATER, TileType.LAND)

    def test_immutability(self, board):
        with pytest.raises(ValidationError):
            board.width = 10

    def test_name_required(self, checkerboard_sample):
        with pytest.raises(ValidationError):
            MapConfiguration(name="", sample=checkerboard_sample, width=1, height=1)

    def test_negative_size_rejected(self, checkerboard_sample):
        with pytest.raises(ValidationError):
            MapConfiguration(name="x", sample=checkerboard_sample, width=-1, height=1)

    def test_with_tiles(self, board):
        tiles = [[TileType.LAND, TileType.WATER]]
        updated = board.with_tiles(tiles)
        assert updated.tiles == ((TileType.LAND, TileType.WATER),)
        assert board.tiles is None
        assert updated.name == board.name


class TestMapConfigStore:
    """Tests for saving and loading named configurations."""

    def test_save_and_load(self, store, board):
        store.save(board)
        assert store.load("board") == board

    def test_saved_map_tiles_survive(self, store, board):
        with_map = board.with_tiles([[TileType.WATER, TileType.EMPTY]])
        store.save(with_map)
        assert store.load("board").tiles == ((TileType.WATER, TileType.EMPTY),)

    def test_file_is_readable_json(self, store, board):
        path = store.save(board)
        data = json.loads(path.read_text())
        assert data["version"] == 1
        assert data["configurations"]["board"]["sample"][0] == ["land", "water", "land"]
        assert data["configurations"]["board"]["solver"]["selection"] == "uniform"

    def test_duplicate_name_overwrites(self, store, board):
        store.save(board)
        store.save(board.model_copy(update={"width": 9}))
        assert store.list_names() == ["board"]
        assert store.load("board").width == 9

    def test_missing_name(self, store, board):
        store.save(board)
        with pytest.raises(MapConfigNotFoundError) as exc_info:
            store.load("other")
        assert exc_info.value.name == "other"

    def test_missing_file_behaves_as_empty(self, store):
        assert store.list_names() == []
        assert not store.exists("board")
        with pytest.raises(MapConfigNotFoundError):
            store.load("board")
        assert not store.path.exists()

    def test_list_names_sorted(self, store, board):
        for name in ["zeta", "alpha", "mid"]:
            store.save(board.model_copy(update={"name": name}))
        assert store.list_names() == ["alpha", "mid", "zeta"]

    def test_delete(self, store, board):
        store.save(board)
        store.delete("board")
        assert not store.exists("board")
        with pytest.raises(MapConfigNotFoundError):
            store.delete("board")

    def test_creates_parent_directories(self, temp_data_dir, board):
        store = MapConfigStore(temp_data_dir / "nested" / "dir" / "maps.json")
        store.save(board)
        assert store.exists("board")

    def test_corrupt_file(self, store):
        store.path.write_text("{not json")
        with pytest.raises(MapConfigStoreError):
            store.list_names()

    def test_wrong_shape(self, store):
        store.path.write_text(json.dumps(["board"]))
        with pytest.raises(MapConfigStoreError):
            store.list_names()

    def test_invalid_entry(self, store):
        store.path.write_text(json.dumps({"version": 1, "configurations": {"bad": {"name": "bad"}}}))
        with pytest.raises(MapConfigStoreError):
            store.load("bad")
