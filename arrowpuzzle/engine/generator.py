"""Randomized level generation with solvability certification.

Each attempt scans the board row-major and drops pieces at random, rejecting
single pieces that do not fit. Boards with at least one immediately exitable
head are handed to a certifier (bounded BFS by default, CP-SAT on request);
the first certified board wins. When every attempt fails a fixed, trivially
solvable layout is returned instead.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, replace
from typing import List, Optional

from ..core.constants import (
    DEFAULT_DENSITY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MAX_STATES,
    DEFAULT_YIELD_EVERY,
    DIRECTIONS,
    MAX_DENSITY,
    MAX_PIECE_LENGTH,
    MAX_SIDE,
    MIN_DENSITY,
    MIN_PIECE_LENGTH,
    MIN_SIDE,
    Bounds,
    Direction,
)
from ..core.exceptions import PuzzleError, ValidationError
from ..core.models import Move, Segment
from ..utils.logger import get_logger
from .exits import exitable_heads
from .grid import ArrowGrid
from .ordering import solve_ordering
from .solver import solve
from .validator import GridValidator


LOGGER = get_logger(__name__)

CERTIFIERS = ("bfs", "cpsat")


def _clamp(value, low, high):
    return max(low, min(high, value))


@dataclass
class GeneratorConfig:
    rows: int
    cols: int
    density: float = DEFAULT_DENSITY
    max_length: int = DEFAULT_MAX_LENGTH
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_states: int = DEFAULT_MAX_STATES
    yield_every: int = DEFAULT_YIELD_EVERY
    seed: Optional[int] = None
    certifier: str = "bfs"
    cpsat_timeout: float = 10.0

    def bounds(self) -> Bounds:
        return Bounds(rows=self.rows, cols=self.cols)

    def clamped(self) -> "GeneratorConfig":
        """Copy with the board settings pulled into their supported ranges."""

        return replace(
            self,
            rows=_clamp(self.rows, MIN_SIDE, MAX_SIDE),
            cols=_clamp(self.cols, MIN_SIDE, MAX_SIDE),
            density=_clamp(self.density, MIN_DENSITY, MAX_DENSITY),
            max_length=_clamp(self.max_length, MIN_PIECE_LENGTH, MAX_PIECE_LENGTH),
        )


@dataclass
class LevelResult:
    grid: ArrowGrid
    attempts: int
    solution: Optional[List[Move]] = None
    is_fallback: bool = False
    seed: Optional[int] = None


class LevelGenerator:
    """Builds random boards until one is certified solvable.

    The generator owns its piece-id counter, so ids keep increasing across
    attempts and across repeated calls on the same instance.
    """

    def __init__(self, config: GeneratorConfig, validator: Optional[GridValidator] = None) -> None:
        if config.certifier not in CERTIFIERS:
            raise ValueError(f"Unknown certifier {config.certifier!r}; expected one of {CERTIFIERS}")
        self.config = config
        self.rng = random.Random(config.seed)
        self.validator = validator or GridValidator()
        self._next_piece_id = 1

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self) -> ArrowGrid:
        return self.generate_level().grid

    def generate_level(self) -> LevelResult:
        for attempt in range(1, self.config.max_attempts + 1):
            result = self._run_attempt(attempt)
            if result is not None:
                return result
        return self._fallback()

    async def generate_async(self) -> ArrowGrid:
        return (await self.generate_level_async()).grid

    async def generate_level_async(self) -> LevelResult:
        """Same as :meth:`generate_level`, yielding to the event loop between batches."""

        yield_every = max(1, self.config.yield_every)
        for attempt in range(1, self.config.max_attempts + 1):
            result = self._run_attempt(attempt)
            if result is not None:
                return result
            if attempt % yield_every == 0:
                await asyncio.sleep(0)
        return self._fallback()

    # ------------------------------------------------------------------
    # Attempts
    # ------------------------------------------------------------------
    def _run_attempt(self, attempt: int) -> Optional[LevelResult]:
        try:
            candidate = self._build_candidate()
            if candidate.is_empty():
                LOGGER.debug("Attempt %d placed no pieces", attempt)
                return None
            if not exitable_heads(candidate):
                LOGGER.debug("Attempt %d has no exitable head", attempt)
                return None
            solution = self._certify(candidate)
            if solution is None:
                LOGGER.debug("Attempt %d could not be certified", attempt)
                return None
            validation = self.validator.validate(candidate)
            if not validation.ok:
                raise ValidationError(f"Grid validation failed: {validation.messages}")
        except PuzzleError as exc:
            LOGGER.warning("Generation attempt %d failed: %s", attempt, exc)
            return None

        LOGGER.info(
            "Accepted %dx%d level on attempt %d (%d pieces, %d-move solution)",
            candidate.rows, candidate.cols, attempt, len(candidate.pieces()), len(solution),
        )
        return LevelResult(
            grid=candidate,
            attempts=attempt,
            solution=solution,
            seed=self.config.seed,
        )

    def _build_candidate(self) -> ArrowGrid:
        rows, cols = self.config.rows, self.config.cols
        grid = ArrowGrid.empty(rows, cols)
        max_length = max(1, self.config.max_length)
        for r in range(rows):
            for c in range(cols):
                if grid.cells[r][c] is not None:
                    continue
                if self.rng.random() >= self.config.density:
                    continue
                direction = self.rng.choice(DIRECTIONS)
                length = self.rng.randint(1, max_length)
                if grid.footprint(r, c, direction, length) is None:
                    continue
                grid.place_piece(self._issue_id(), r, c, direction, length)
        return grid

    def _certify(self, grid: ArrowGrid) -> Optional[List[Move]]:
        if self.config.certifier == "cpsat":
            return solve_ordering(grid, timeout=self.config.cpsat_timeout)
        return solve(grid, self.config.max_states)

    def _issue_id(self) -> int:
        piece_id = self._next_piece_id
        self._next_piece_id += 1
        return piece_id

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------
    def _fallback(self) -> LevelResult:
        LOGGER.warning(
            "No certified level after %d attempts; using fallback layout",
            self.config.max_attempts,
        )
        grid = fallback_grid(self.config.rows, self.config.cols, self._issue_id())
        return LevelResult(
            grid=grid,
            attempts=self.config.max_attempts,
            solution=[Move(0, 0)],
            is_fallback=True,
            seed=self.config.seed,
        )


def fallback_grid(rows: int, cols: int, piece_id: int = 1) -> ArrowGrid:
    """Trivially solvable layout: one RIGHT piece anchored at the top-left.

    The head sits at ``(0, 0)`` with its second segment at ``(0, 1)``; own
    segments never block, so the single move ``(0, 0)`` clears the board.
    Both segments record length 2 so the declared length matches the cells
    actually covered and the layout passes :class:`GridValidator`; boards one
    column wide get a lone single-cell piece of length 1.

    Only the layout is fixed. :class:`LevelGenerator` passes an id drawn from
    its own counter, so the canonical key of the fallback differs between
    calls on the same generator.
    """

    grid = ArrowGrid.empty(rows, cols)
    if rows < 1 or cols < 1:
        return grid
    length = 2 if cols >= 2 else 1
    grid.set_segment(0, 0, Segment(piece_id, Direction.RIGHT, length, is_head=True))
    if length == 2:
        grid.set_segment(0, 1, Segment(piece_id, Direction.RIGHT, length, is_head=False))
    return grid


def generate(
    rows: int,
    cols: int,
    density: float = DEFAULT_DENSITY,
    max_length: int = DEFAULT_MAX_LENGTH,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    seed: Optional[int] = None,
) -> ArrowGrid:
    config = GeneratorConfig(
        rows=rows, cols=cols, density=density, max_length=max_length,
        max_attempts=max_attempts, seed=seed,
    )
    return LevelGenerator(config).generate()


async def generate_async(
    rows: int,
    cols: int,
    density: float = DEFAULT_DENSITY,
    max_length: int = DEFAULT_MAX_LENGTH,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    seed: Optional[int] = None,
) -> ArrowGrid:
    config = GeneratorConfig(
        rows=rows, cols=cols, density=density, max_length=max_length,
        max_attempts=max_attempts, seed=seed,
    )
    return await LevelGenerator(config).generate_async()
