"""Hint lookup against the live board."""

from __future__ import annotations

from typing import Optional

from ..core.models import Move
from .exits import can_exit
from .grid import ArrowGrid


def find_hint(grid: ArrowGrid) -> Optional[Move]:
    """First exitable head in row-major order, or ``None`` when nothing can move.

    No search is involved; a hint only promises an immediately legal move,
    not one that keeps the board solvable.
    """

    for r, c, _ in grid.head_cells():
        if can_exit(grid, r, c):
            return Move(r, c)
    return None
