"""CP-SAT exit-order certifier using OR-Tools.

Pieces never move, only leave, so a piece's blockers are fixed up front: the
foreign pieces sitting on its head's ray. A board is clearable exactly when
the pieces can be ranked so every blocker leaves before the piece it blocks.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from ortools.sat.python import cp_model

from ..core.models import Move
from ..utils.logger import get_logger
from .exits import blocking_pieces
from .grid import ArrowGrid

LOGGER = get_logger(__name__)


def blocker_graph(grid: ArrowGrid) -> Dict[int, Set[int]]:
    """Map each piece id to the ids that must leave before it can."""

    return {
        cell.piece_id: blocking_pieces(grid, r, c)
        for r, c, cell in grid.head_cells()
    }


def solve_ordering(grid: ArrowGrid, timeout: float = 10.0) -> Optional[List[Move]]:
    """Find an exit order via CP-SAT.

    Args:
        grid: Board to certify; left untouched.
        timeout: Solver time limit in seconds.

    Returns:
        Head moves in exit order, or None if no order exists, the grid is
        ragged, or the solver gave up within ``timeout``.
    """
    if not grid.is_rectangular:
        return None

    heads: Dict[int, Move] = {cell.piece_id: Move(r, c) for r, c, cell in grid.head_cells()}
    headless = set(grid.pieces()) - set(heads)
    if headless:
        LOGGER.debug("Pieces without a head can never leave: %s", sorted(headless))
        return None

    if not heads:
        return []

    graph = blocker_graph(grid)
    piece_ids = sorted(heads)
    upper = len(piece_ids) - 1

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: one rank variable per piece
    # ------------------------------------------------------------------
    rank = {pid: model.new_int_var(0, upper, f"rank_{pid}") for pid in piece_ids}
    model.add_all_different(list(rank.values()))

    # ------------------------------------------------------------------
    # Step 2: blockers leave first
    # ------------------------------------------------------------------
    edges = 0
    for pid, blockers in graph.items():
        for blocker in blockers:
            model.add(rank[blocker] < rank[pid])
            edges += 1

    # ------------------------------------------------------------------
    # Step 3: solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    LOGGER.debug(
        "CP-SAT: %d pieces, %d blocking edges, solving (timeout=%0.1fs)...",
        len(piece_ids), edges, timeout,
    )
    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.debug("CP-SAT: no exit order (status=%s)", solver.status_name(status))
        return None

    # ------------------------------------------------------------------
    # Step 4: extract the order
    # ------------------------------------------------------------------
    ordered = sorted(piece_ids, key=lambda pid: solver.value(rank[pid]))
    return [heads[pid] for pid in ordered]
