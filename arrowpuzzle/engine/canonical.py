"""Canonical occupancy keys used to deduplicate search states."""

from __future__ import annotations

from .grid import ArrowGrid

CELL_SEPARATOR = ","
ROW_SEPARATOR = ";"


def canonical_key(grid: ArrowGrid) -> str:
    """Encode each cell as its piece id (0 when empty), row by row.

    Two grids share a key iff every cell holds the same piece id. Direction
    and length are left out: search states only ever lose whole pieces, so
    ids alone pin down the occupancy.
    """

    return ROW_SEPARATOR.join(
        CELL_SEPARATOR.join(str(cell.piece_id) if cell is not None else "0" for cell in row)
        for row in grid.cells
    )


def empty_key(rows: int, cols: int) -> str:
    """Key of the cleared ``rows x cols`` board."""

    return ROW_SEPARATOR.join(CELL_SEPARATOR.join("0" for _ in range(cols)) for _ in range(rows))
