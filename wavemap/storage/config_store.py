"""Named map configurations, saved to a JSON file.

A configuration bundles everything needed to reproduce a map: the sample it
was learned from, the output size, the seed and solver settings, and
optionally the generated tiles themselves.

File layout:
    {
      "version": 1,
      "configurations": {"<name>": {...MapConfiguration...}, ...}
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wavemap.core.tiles import TileType
from wavemap.generation.wfc.config import SolverConfig
from wavemap.logging_config import log_storage

logger = logging.getLogger(__name__)

STORE_VERSION = 1

TileRows = tuple[tuple[TileType, ...], ...]


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class MapConfigStoreError(Exception):
    """Base exception for map configuration storage errors."""

    pass


class MapConfigNotFoundError(MapConfigStoreError):
    """No configuration is saved under the given name."""

    def __init__(self, name: str):
        super().__init__(f"No map configuration named {name!r}")
        self.name = name


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------


class MapConfiguration(BaseModel):
    """A named, reproducible map setup (immutable)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    sample: TileRows
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    seed: int | None = None
    solver: SolverConfig = Field(default_factory=SolverConfig)
    tiles: TileRows | None = None  # Generated map, if one was kept

    def with_tiles(self, tiles: Any) -> MapConfiguration:
        """Return a copy holding a generated map."""
        return self.model_validate({**self.model_dump(), "tiles": tiles})


# -----------------------------------------------------------------------------
# MapConfigStore
# -----------------------------------------------------------------------------


class MapConfigStore:
    """Handles saving and loading named map configurations."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log_storage(logger, "read", self.path, success=False, details=str(e))
            raise MapConfigStoreError(f"Cannot read map store {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("configurations"), dict):
            raise MapConfigStoreError(f"Map store {self.path} is not a configuration file")
        return data["configurations"]

    def _write(self, configurations: dict[str, dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(
                {"version": STORE_VERSION, "configurations": configurations},
                f,
                indent=2,
            )

    def save(self, config: MapConfiguration) -> Path:
        """Save a configuration, replacing any existing one with the same name."""
        configurations = self._read()
        replaced = config.name in configurations
        configurations[config.name] = config.model_dump(mode="json")
        self._write(configurations)
        log_storage(
            logger, "save", self.path,
            details=f"{config.name} ({'replaced' if replaced else 'new'})",
        )
        return self.path

    def load(self, name: str) -> MapConfiguration:
        """
        Load a configuration by name.

        Raises:
            MapConfigNotFoundError: If nothing is saved under that name
            MapConfigStoreError: If the stored entry is invalid
        """
        configurations = self._read()
        if name not in configurations:
            raise MapConfigNotFoundError(name)
        try:
            config = MapConfiguration.model_validate(configurations[name])
        except ValidationError as e:
            raise MapConfigStoreError(f"Stored configuration {name!r} is invalid: {e}") from e
        log_storage(logger, "load", self.path, details=name)
        return config

    def exists(self, name: str) -> bool:
        return name in self._read()

    def list_names(self) -> list[str]:
        """All saved configuration names, sorted."""
        return sorted(self._read())

    def delete(self, name: str) -> None:
        """
        Remove a configuration.

        Raises:
            MapConfigNotFoundError: If nothing is saved under that name
        """
        configurations = self._read()
        if name not in configurations:
            raise MapConfigNotFoundError(name)
        del configurations[name]
        self._write(configurations)
        log_storage(logger, "delete", self.path, details=name)
