"""
Wave Function Collapse solver.

This is the heart of WFC - the loop that observes (collapses) cells and
propagates constraints until the entire wave is determined.

The algorithm:
1. Find the uncollapsed cell with lowest entropy (most constrained)
2. Collapse it to one tile (weighted random choice)
3. Propagate: update neighbours based on adjacency rules
4. Repeat until complete or contradiction

Contradictions are recovered by restoring a checkpoint of the wave and
ruling out the choice that led there, up to a fixed budget, and then by
restarting from a fresh wave.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
import random
from typing import Any, Callable, Protocol

from wavemap.core.types import IdGrid
from wavemap.logging_config import log_solver
from .adjacency import AdjacencyModel
from .config import SolverConfig
from .errors import Contradiction, SolveFailed
from .propagation import PropagationEngine
from .wave import Wave, WaveCheckpoint

logger = logging.getLogger(__name__)


class SolverState(Enum):
    """The current state of the WFC solver."""
    RUNNING = auto()  # Still solving, more steps needed
    SOLVED = auto()   # All cells collapsed successfully
    FAILED = auto()   # Gave up: budget exhausted, unsatisfiable or cancelled


class CancelFlag(Protocol):
    """Anything with an is_set() method, e.g. threading.Event."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True)
class SolveResult:
    """
    Outcome of a Collapser run.

    Only a SOLVED result carries a grid; a FAILED result never exposes a
    partial one.
    """
    state: SolverState
    tile_ids: tuple[tuple[int, ...], ...] | None = None
    tiles: tuple[tuple[Any, ...], ...] | None = None
    reason: str | None = None
    seed: int | None = None
    attempts: int = 0
    steps: int = 0
    backtracks: int = 0

    @property
    def solved(self) -> bool:
        return self.state == SolverState.SOLVED

    def require_solved(self) -> tuple[tuple[Any, ...], ...]:
        """
        Get the resolved tile grid.

        Raises:
            SolveFailed: If the run did not solve
        """
        if not self.solved or self.tiles is None:
            raise SolveFailed(self.reason or "not solved", self.attempts)
        return self.tiles


@dataclass
class _Checkpoint:
    """A saved wave plus the first real choice made after it was taken."""
    wave_state: WaveCheckpoint
    decision: tuple[int, int, int] | None = None  # (x, y, tile_id)


class Collapser:
    """
    The WFC control loop.

    Usage:
        collapser = Collapser(model)
        result = collapser.run(width=32, height=32, seed=7)
        if result.solved:
            grid = result.tiles

    Or step by step:
        collapser.start(32, 32, seed=7)
        while collapser.step() == SolverState.RUNNING:
            pass
    """

    def __init__(
        self,
        model: AdjacencyModel,
        config: SolverConfig | None = None,
        cancel_event: CancelFlag | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ):
        """
        Initialize the solver.

        Args:
            model: Learned adjacency rules and tile frequencies (read-only here)
            config: Backtracking budget and selection strategy
            cancel_event: Checked at the top of every step; when set, the run fails
            progress_callback: Optional callback(collapsed_cells, total_cells)
        """
        self.model = model
        self.config = config if config is not None else SolverConfig()
        self.cancel_event = cancel_event
        self.progress_callback = progress_callback
        self.propagator = PropagationEngine(model)

        self.wave: Wave | None = None
        self.state = SolverState.FAILED
        self.failure_reason: str | None = None
        self.step_count = 0
        self.attempt = 0

        # Track the last collapsed cell (for visualization/debugging)
        self.last_collapsed: tuple[int, int] | None = None

        # Backtracking state
        self._rng = random.Random()
        self._checkpoints: list[_Checkpoint] = []
        self._since_checkpoint = 0
        self._backtrack_count = 0
        self._terminal = False

    @property
    def collapsed_count(self) -> int:
        """Number of cells that have been collapsed."""
        return self.wave.collapsed_count if self.wave is not None else 0

    @property
    def backtrack_count(self) -> int:
        return self._backtrack_count

    def start(self, width: int, height: int, seed: int | None = None) -> SolverState:
        """
        Begin a fresh attempt on a new wave.

        A zero-area wave is solved immediately.
        """
        weights = self.model.weights() if self.config.weighted and self.model.tile_count else None
        self.wave = Wave(width, height, self.model.tile_count, weights)
        self._rng = random.Random(seed)
        self.state = SolverState.RUNNING
        self.failure_reason = None
        self.step_count = 0
        self.last_collapsed = None
        self._checkpoints.clear()
        self._since_checkpoint = 0
        self._backtrack_count = 0
        self._terminal = False

        if self.wave.size == 0:
            self.state = SolverState.SOLVED
            return self.state

        if self.model.tile_count == 0:
            return self._fail("adjacency model has no tiles", terminal=True)

        try:
            self.propagator.propagate_all(self.wave)
        except Contradiction as exc:
            # No random choice has been made yet, so retrying cannot help
            return self._fail(f"learned rules cannot fill a {width}x{height} map ({exc})", terminal=True)

        if self.config.max_backtracks > 0:
            self._save_checkpoint()
        return self.state

    def step(self) -> SolverState:
        """
        Collapse one cell and propagate.

        Returns the solver state after this step.
        """
        if self.state != SolverState.RUNNING or self.wave is None:
            return self.state

        if self.cancel_event is not None and self.cancel_event.is_set():
            return self._fail("cancelled", terminal=True)

        if self.config.max_steps is not None and self.step_count >= self.config.max_steps:
            return self._fail(f"step budget ({self.config.max_steps}) exhausted")

        target = self.wave.min_entropy_cell()
        if target is None:
            self.state = SolverState.SOLVED
            return self.state

        if (
            self.config.max_backtracks > 0
            and self._since_checkpoint >= self.config.checkpoint_interval
        ):
            self._save_checkpoint()

        x, y = target
        options = sorted(self.wave.possibilities_at(x, y))
        tile_id = self._choose(options)

        # Remember the first real choice after the latest checkpoint so a
        # backtrack can try something else there
        if len(options) > 1 and self._checkpoints and self._checkpoints[-1].decision is None:
            self._checkpoints[-1].decision = (x, y, tile_id)

        self.wave.force(x, y, tile_id)
        self.last_collapsed = (x, y)
        self._since_checkpoint += 1
        self.step_count += 1

        try:
            self.propagator.propagate(self.wave, (x, y))
        except Contradiction as exc:
            return self._recover(exc)

        self._report_progress()
        return self.state

    def _choose(self, options: list[int]) -> int:
        """
        Pick one tile id from a cell's sorted possibilities.

        Frequency-weighted selection falls back to uniform when none of the
        options was ever observed.
        """
        if len(options) == 1:
            return options[0]

        weights = None
        if self.config.weighted:
            weights = [self.model.frequency(tile_id) for tile_id in options]
            if sum(weights) <= 0:
                weights = None

        return self._rng.choices(options, weights=weights, k=1)[0]

    def _report_progress(self) -> None:
        if self.progress_callback is not None:
            self.progress_callback(self.wave.collapsed_count, self.wave.size)

    def _save_checkpoint(self) -> None:
        """Save current wave state for backtracking."""
        self._checkpoints.append(_Checkpoint(self.wave.checkpoint()))
        self._since_checkpoint = 0

    def _recover(self, exc: Contradiction) -> SolverState:
        """Handle a contradiction by backtracking or giving up."""
        if self.config.max_backtracks == 0:
            return self._fail(f"{exc} with backtracking disabled")

        while self._checkpoints:
            if self._backtrack_count >= self.config.max_backtracks:
                return self._fail(f"{exc} after max backtracks ({self.config.max_backtracks})")

            checkpoint = self._checkpoints.pop()
            self._backtrack_count += 1
            self.wave.restore(checkpoint.wave_state)

            if checkpoint.decision is None:
                # Only forced moves followed this checkpoint, so it is a dead end
                continue

            x, y, tile_id = checkpoint.decision
            try:
                self.wave.restrict(x, y, self.wave.possibilities_at(x, y) - {tile_id})
                self.propagator.propagate(self.wave, (x, y))
            except Contradiction:
                continue

            log_solver(
                logger,
                self.attempt,
                "BACKTRACK",
                f"{exc} | restored to {self.wave.collapsed_count} collapsed | "
                f"ruled out tile {tile_id} at ({x}, {y}) | "
                f"backtrack {self._backtrack_count}/{self.config.max_backtracks}",
            )
            self._save_checkpoint()
            self._report_progress()
            return self.state

        return self._fail(f"{exc} with no checkpoints left to restore")

    def _fail(self, reason: str, terminal: bool = False) -> SolverState:
        self.state = SolverState.FAILED
        self.failure_reason = reason
        self._terminal = terminal
        self._checkpoints.clear()
        log_solver(logger, self.attempt, "FAILED", reason, level=logging.WARNING)
        return self.state

    def solve(self) -> bool:
        """
        Run the current attempt to completion.

        Returns True if solved successfully, False if it failed.
        """
        while self.step() == SolverState.RUNNING:
            pass
        return self.state == SolverState.SOLVED

    def run(self, width: int, height: int, seed: int | None = None) -> SolveResult:
        """
        Solve a width x height map, restarting on failure.

        Each attempt uses its own seed derived from `seed`, so equal seeds
        give identical results.

        Returns:
            A SOLVED result with the grid, or a FAILED result with a reason
        """
        seeder = random.Random(seed)
        max_attempts = 1 + self.config.max_restarts
        total_steps = 0
        total_backtracks = 0

        for attempt in range(1, max_attempts + 1):
            self.attempt = attempt
            attempt_seed = seeder.getrandbits(32)
            log_solver(logger, attempt, "START", f"{width}x{height} | seed={attempt_seed}")

            self.start(width, height, attempt_seed)
            self.solve()
            total_steps += self.step_count
            total_backtracks += self._backtrack_count

            if self.state == SolverState.SOLVED:
                grid = self.wave.to_grid()
                log_solver(
                    logger, attempt, "SOLVED",
                    f"steps={self.step_count} | backtracks={self._backtrack_count}",
                )
                return SolveResult(
                    state=SolverState.SOLVED,
                    tile_ids=_freeze(grid),
                    tiles=tuple(
                        tuple(self.model.catalog.resolve(tile_id) for tile_id in row)
                        for row in grid
                    ),
                    seed=seed,
                    attempts=attempt,
                    steps=total_steps,
                    backtracks=total_backtracks,
                )

            if self._terminal:
                break
            if attempt < max_attempts:
                log_solver(logger, attempt, "RESTART", f"attempt {attempt + 1}/{max_attempts}")

        return SolveResult(
            state=SolverState.FAILED,
            reason=self.failure_reason,
            seed=seed,
            attempts=self.attempt,
            steps=total_steps,
            backtracks=total_backtracks,
        )


def _freeze(grid: IdGrid) -> tuple[tuple[int, ...], ...]:
    return tuple(tuple(row) for row in grid)
