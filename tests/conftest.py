"""Shared test fixtures for wavemap."""

import tempfile
from pathlib import Path

import pytest

from wavemap.core.tiles import TileType
from wavemap.generation import build_model, get_sample
from wavemap.generation.wfc import AdjacencyModel


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# =============================================================================
# Directories
# =============================================================================

@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="wavemap_test_") as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Samples and models
# =============================================================================

@pytest.fixture
def checkerboard_sample() -> list[list[TileType]]:
    """3x3 land/water checkerboard: LAND gets id 0, WATER id 1."""
    return get_sample("checkerboard")


@pytest.fixture
def island_sample() -> list[list[TileType]]:
    return get_sample("island")


@pytest.fixture
def mountain_sample() -> list[list[TileType]]:
    return get_sample("mountain")


@pytest.fixture
def checkerboard_model(checkerboard_sample) -> AdjacencyModel:
    return build_model(checkerboard_sample)


@pytest.fixture
def island_model(island_sample) -> AdjacencyModel:
    return build_model(island_sample)


@pytest.fixture
def mountain_model(mountain_sample) -> AdjacencyModel:
    return build_model(mountain_sample)
