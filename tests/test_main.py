"""Tests for the wavemap command line."""

import json

import pytest

from wavemap.core.tiles import TileType
from wavemap.main import main
from wavemap.storage import MapConfigStore


@pytest.fixture
def run(temp_data_dir, monkeypatch):
    """Run the CLI against a temporary data directory."""
    monkeypatch.delenv("WAVEMAP_STORE_FILE", raising=False)

    def _run(*args: str) -> int:
        return main(["--data", str(temp_data_dir), *args])

    return _run


def test_generate_and_save(run, temp_data_dir):
    assert run("--sample", "checkerboard", "--width", "4", "--height", "3", "--seed", "5", "--save", "board") == 0

    config = MapConfigStore(temp_data_dir / "maps.json").load("board")
    assert config.width == 4
    assert config.seed == 5
    assert len(config.tiles) == 3
    assert all(len(row) == 4 for row in config.tiles)
    assert (temp_data_dir / "debug.log").exists()


def test_uniform_flag_is_saved(run, temp_data_dir):
    assert run("--sample", "mountain", "--width", "2", "--height", "2", "--uniform", "--save", "flat") == 0
    config = MapConfigStore(temp_data_dir / "maps.json").load("flat")
    assert config.solver.selection.value == "uniform"
    assert config.tiles == ((TileType.MOUNTAIN,) * 2,) * 2


def test_list(run):
    assert run("--list") == 0
    run("--sample", "mountain", "--width", "1", "--height", "1", "--save", "one")
    assert run("--list") == 0


def test_load_saved_map(run):
    run("--sample", "checkerboard", "--width", "3", "--height", "3", "--seed", "1", "--save", "board")
    assert run("--load", "board") == 0


def test_load_missing_map(run):
    assert run("--load", "nothing") == 1


def test_unknown_sample(run):
    assert run("--sample", "volcano") == 1


def test_sample_file(run, temp_data_dir):
    sample = temp_data_dir / "sample.txt"
    sample.write_text("~~~\n~:~\n~~~\n")
    assert run("--sample-file", str(sample), "--width", "5", "--height", "4", "--seed", "2") == 0


def test_unsatisfiable_sample_fails(run, temp_data_dir):
    # A single tile has no learned neighbours, so no map wider than 1 can be built
    sample = temp_data_dir / "single.txt"
    sample.write_text("^\n")
    assert run("--sample-file", str(sample), "--width", "2", "--height", "1") == 1


def test_rects_use_tile_size_setting(run, temp_data_dir, monkeypatch):
    monkeypatch.setenv("WAVEMAP_TILE_SIZE", "8")
    out = temp_data_dir / "out" / "rects.json"
    assert run("--sample", "mountain", "--width", "3", "--height", "2", "--rects", str(out)) == 0

    data = json.loads(out.read_text())
    assert data["tile_size"] == 8
    assert len(data["rects"]) == 6
    assert data["rects"][-1]["x"] == 16
    assert data["rects"][-1]["y"] == 8
    assert data["rects"][-1]["size"] == 8


def test_tile_size_flag_overrides_setting(run, temp_data_dir):
    out = temp_data_dir / "rects.json"
    assert run("--sample", "mountain", "--width", "1", "--height", "1", "--tile-size", "4", "--rects", str(out)) == 0
    assert json.loads(out.read_text())["rects"] == [
        {"x": 0, "y": 0, "size": 4, "colour": [0.5, 0.5, 0.5, 1.0]},
    ]


def test_invalid_tile_size_for_rects(run, temp_data_dir):
    out = temp_data_dir / "rects.json"
    assert run("--sample", "mountain", "--width", "1", "--height", "1", "--tile-size", "0", "--rects", str(out)) == 1
    assert not out.exists()


def test_invalid_environment_setting(run, monkeypatch):
    monkeypatch.setenv("WAVEMAP_MAX_BACKTRACKS", "-1")
    assert run("--list") == 1
