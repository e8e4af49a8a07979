"""Application settings for wavemap.

Settings come from defaults, overridden by WAVEMAP_* environment variables
(a .env file in the working directory is loaded first).

    WAVEMAP_DATA_DIR              data directory (log file, map store)
    WAVEMAP_STORE_FILE            map configuration file name inside the data dir
    WAVEMAP_TILE_SIZE             pixel size of one tile when laying out rectangles
    WAVEMAP_SAMPLE                built-in sample used when none is given
    WAVEMAP_CHECKPOINT_INTERVAL   see SolverConfig
    WAVEMAP_MAX_BACKTRACKS
    WAVEMAP_MAX_RESTARTS
    WAVEMAP_MAX_STEPS
    WAVEMAP_SELECTION             "uniform" or "frequency_weighted"
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from wavemap.generation.wfc.config import SolverConfig

ENV_PREFIX = "WAVEMAP_"

_SOLVER_FIELDS = ("checkpoint_interval", "max_backtracks", "max_restarts", "max_steps", "selection")


class Settings(BaseModel):
    """Settings for the command line front end and storage."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Path("data")
    store_file: str = "maps.json"
    tile_size: int = Field(default=16, ge=1)
    sample: str = "island"
    solver: SolverConfig = Field(default_factory=SolverConfig)

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_file


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Variables to read (default: os.environ after loading .env)

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    def read(name: str) -> str | None:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        return value if value not in (None, "") else None

    solver = {name: read(name) for name in _SOLVER_FIELDS}
    data: dict[str, object] = {
        "solver": {name: value for name, value in solver.items() if value is not None},
    }
    for name in ("data_dir", "store_file", "tile_size", "sample"):
        value = read(name)
        if value is not None:
            data[name] = value

    return Settings.model_validate(data)
