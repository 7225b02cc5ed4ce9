"""Data models supporting the arrow puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .constants import Direction


class Move(NamedTuple):
    """Head coordinate of a piece that was removed."""

    row: int
    col: int


@dataclass(frozen=True)
class Segment:
    """One occupied cell belonging to a piece."""

    piece_id: int
    direction: Direction
    length: int
    is_head: bool = False


@dataclass
class Piece:
    """Derived view of all segments sharing a piece id."""

    id: int
    direction: Direction
    length: int
    cells: List[Tuple[int, int]] = field(default_factory=list)
    head: Optional[Tuple[int, int]] = None
    head_count: int = 0

    @property
    def size(self) -> int:
        return len(self.cells)
