"""Persistence of named map configurations."""

from .config_store import (
    MapConfiguration,
    MapConfigStore,
    MapConfigStoreError,
    MapConfigNotFoundError,
)

__all__ = [
    "MapConfiguration",
    "MapConfigStore",
    "MapConfigStoreError",
    "MapConfigNotFoundError",
]
