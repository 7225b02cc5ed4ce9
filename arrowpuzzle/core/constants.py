"""Shared constants and enumerations for the arrow puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Travel directions a piece can point in."""

    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def step(self) -> Tuple[int, int]:
        return DIRECTION_STEPS[self]

    @property
    def glyph(self) -> str:
        return ARROW_GLYPHS[self]


DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

# (row delta, col delta) for one step in the direction of travel.
DIRECTION_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

ARROW_GLYPHS: Dict[Direction, str] = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols


# Settings ranges accepted by the settings surface. The engine itself does not
# enforce them; see GeneratorConfig.clamped().
MIN_SIDE = 2
MAX_SIDE = 12
MIN_DENSITY = 0.0
MAX_DENSITY = 0.9
MIN_PIECE_LENGTH = 1
MAX_PIECE_LENGTH = 4

DEFAULT_ROWS = 4
DEFAULT_COLS = 4
DEFAULT_DENSITY = 0.32
DEFAULT_MAX_LENGTH = 2
DEFAULT_MAX_ATTEMPTS = 500
DEFAULT_MAX_STATES = 20000
DEFAULT_YIELD_EVERY = 20
