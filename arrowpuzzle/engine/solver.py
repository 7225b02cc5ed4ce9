"""Bounded breadth-first solver over whole-piece removals."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Set, Tuple

from ..core.constants import DEFAULT_MAX_STATES
from ..core.exceptions import MoveError
from ..core.models import Move
from ..utils.logger import get_logger
from .canonical import canonical_key, empty_key
from .exits import can_exit, exitable_heads
from .grid import ArrowGrid

LOGGER = get_logger(__name__)

Solution = List[Move]


@dataclass
class SearchOutcome:
    """Result of one bounded search.

    ``solution`` is ``None`` both when the layout is unsolvable and when the
    state budget ran out first; the two cases are deliberately not told apart.
    """

    solution: Optional[Solution]
    explored: int
    visited: int

    @property
    def found(self) -> bool:
        return self.solution is not None


def search(start_grid: ArrowGrid, max_states: int = DEFAULT_MAX_STATES) -> SearchOutcome:
    """Breadth-first search from ``start_grid`` to the cleared board.

    Every dequeued node counts against ``max_states``; the search gives up as
    soon as the count exceeds it, so at most ``max_states + 1`` nodes are ever
    dequeued.
    """

    if not start_grid.is_rectangular:
        LOGGER.debug("Refusing to search a grid whose rows do not match its shape")
        return SearchOutcome(solution=None, explored=0, visited=0)

    goal = empty_key(start_grid.rows, start_grid.cols)
    start_key = canonical_key(start_grid)
    visited: Set[str] = {start_key}
    frontier: Deque[Tuple[ArrowGrid, str, Solution]] = deque([(start_grid.clone(), start_key, [])])
    explored = 0

    while frontier:
        grid, key, moves = frontier.popleft()
        explored += 1
        if explored > max_states:
            LOGGER.debug("Search budget of %d states exhausted", max_states)
            return SearchOutcome(solution=None, explored=explored, visited=len(visited))
        if key == goal:
            LOGGER.debug(
                "Solved in %d moves after %d states (%d visited)",
                len(moves), explored, len(visited),
            )
            return SearchOutcome(solution=moves, explored=explored, visited=len(visited))

        for move in exitable_heads(grid):
            piece_id = grid.cells[move.row][move.col].piece_id
            successor = grid.without_piece(piece_id)
            successor_key = canonical_key(successor)
            if successor_key in visited:
                continue
            visited.add(successor_key)
            frontier.append((successor, successor_key, moves + [move]))

    LOGGER.debug("Frontier exhausted after %d states without clearing the board", explored)
    return SearchOutcome(solution=None, explored=explored, visited=len(visited))


def solve(start_grid: ArrowGrid, max_states: int = DEFAULT_MAX_STATES) -> Optional[Solution]:
    """Return a list of head moves that clears the board, or ``None``."""

    return search(start_grid, max_states).solution


def apply_solution(grid: ArrowGrid, solution: Solution) -> ArrowGrid:
    """Replay ``solution`` on a clone of ``grid`` and return the final board.

    Raises:
        MoveError: a move names a cell whose piece cannot exit at that point.
    """

    board = grid.clone()
    for step, move in enumerate(solution, start=1):
        if not can_exit(board, move.row, move.col):
            raise MoveError(f"Move {step} at {tuple(move)} is not exitable on the current board")
        board.remove_piece(board.cells[move.row][move.col].piece_id)
    return board
