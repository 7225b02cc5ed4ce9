"""Exit predicate: can a piece leave the board right now?"""

from __future__ import annotations

from typing import List, Set

from ..core.models import Move
from .grid import ArrowGrid


def can_exit(grid: ArrowGrid, row: int, col: int) -> bool:
    """Return True when the head at ``(row, col)`` has a clear ray to the edge.

    Cells of the same piece never block; any foreign segment does. Empty
    cells, body segments, off-board coordinates and ragged grids are simply
    not exitable.
    """

    if not grid.is_rectangular or not grid.bounds.contains(row, col):
        return False
    cell = grid.cells[row][col]
    if cell is None or not cell.is_head:
        return False

    dr, dc = cell.direction.step
    r, c = row + dr, col + dc
    while grid.bounds.contains(r, c):
        other = grid.cells[r][c]
        if other is not None and other.piece_id != cell.piece_id:
            return False
        r += dr
        c += dc
    return True


def blocking_pieces(grid: ArrowGrid, row: int, col: int) -> Set[int]:
    """Ids of every foreign piece lying on the head's ray to the edge.

    A piece can exit exactly when this set is empty. Non-head cells yield an
    empty set; callers pair this with :func:`can_exit` when that matters.
    """

    blockers: Set[int] = set()
    if not grid.is_rectangular or not grid.bounds.contains(row, col):
        return blockers
    cell = grid.cells[row][col]
    if cell is None or not cell.is_head:
        return blockers

    dr, dc = cell.direction.step
    r, c = row + dr, col + dc
    while grid.bounds.contains(r, c):
        other = grid.cells[r][c]
        if other is not None and other.piece_id != cell.piece_id:
            blockers.add(other.piece_id)
        r += dr
        c += dc
    return blockers


def exitable_heads(grid: ArrowGrid) -> List[Move]:
    """Every head that can exit now, in row-major order."""

    return [Move(r, c) for r, c, _ in grid.head_cells() if can_exit(grid, r, c)]
