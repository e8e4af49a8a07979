"""Solver configuration for Wave Function Collapse."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SelectionStrategy(Enum):
    """How a cell's tile is chosen when it collapses."""

    UNIFORM = "uniform"                        # Every remaining tile equally likely
    FREQUENCY_WEIGHTED = "frequency_weighted"  # Proportional to sample frequency


class SolverConfig(BaseModel):
    """Tuning knobs for the Collapser.

    Attributes:
        checkpoint_interval: Copy the wave every N collapses for backtracking.
        max_backtracks: Checkpoint restores allowed per attempt (0 = abort on
            the first contradiction).
        max_restarts: Full restarts with a fresh wave after an attempt fails.
        max_steps: Optional cap on collapse steps per attempt.
        selection: Tile choice strategy. Also decides whether entropy is
            weighted by sample frequency.
    """

    model_config = ConfigDict(frozen=True)

    checkpoint_interval: int = Field(default=8, ge=1)
    max_backtracks: int = Field(default=32, ge=0)
    max_restarts: int = Field(default=3, ge=0)
    max_steps: int | None = Field(default=None, ge=1)
    selection: SelectionStrategy = SelectionStrategy.FREQUENCY_WEIGHTED

    @property
    def weighted(self) -> bool:
        return self.selection == SelectionStrategy.FREQUENCY_WEIGHTED
