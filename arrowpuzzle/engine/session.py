"""Play session: an untouched initial board plus a working copy."""

from __future__ import annotations

from typing import Optional

from ..core.models import Move
from ..utils.logger import get_logger
from .exits import can_exit
from .grid import ArrowGrid
from .hints import find_hint

LOGGER = get_logger(__name__)


class PlaySession:
    """Tracks one level being played.

    ``initial`` is never mutated; every reset clones it again.
    """

    def __init__(self, initial: ArrowGrid) -> None:
        self.initial = initial.clone()
        self.board = self.initial.clone()
        self.moves = 0

    def try_remove(self, row: int, col: int) -> bool:
        """Remove the piece headed at ``(row, col)`` if it can exit.

        Returns False, leaving the board as is, for blocked heads, body
        segments, empty cells and off-board coordinates.
        """

        if not can_exit(self.board, row, col):
            return False
        piece_id = self.board.cells[row][col].piece_id
        self.board.remove_piece(piece_id)
        self.moves += 1
        LOGGER.debug("Removed piece %d via head %s", piece_id, (row, col))
        return True

    def hint(self) -> Optional[Move]:
        return find_hint(self.board)

    def reset(self) -> None:
        self.board = self.initial.clone()
        self.moves = 0

    @property
    def is_cleared(self) -> bool:
        return self.board.is_empty()

    @property
    def arrows_left(self) -> int:
        return self.board.head_count()
