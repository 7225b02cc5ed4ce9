"""Pretty-print helpers for arrow grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Optional

from ..engine.exits import exitable_heads

if TYPE_CHECKING:
    from ..core.models import Segment
    from ..engine.generator import LevelResult
    from ..engine.grid import ArrowGrid


EMPTY_SYMBOL = "."
BODY_SYMBOL = "o"


def cell_symbol(cell: Optional[Segment]) -> str:
    if cell is None:
        return EMPTY_SYMBOL
    if not cell.is_head:
        return BODY_SYMBOL
    suffix = str(cell.length) if cell.length > 1 else ""
    return f"{cell.direction.glyph}{suffix}"


def format_grid(grid: ArrowGrid) -> str:
    width = grid.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.rows):
        row_cells = [cell_symbol(grid.cell(r, c)) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: ArrowGrid, *, label: str | None = None, stream=None) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_level_stats(result: LevelResult, *, stream=None) -> None:
    """Print board + stats for a generated level."""

    stream = stream or sys.stdout
    grid = result.grid
    print(format_grid(grid), file=stream)

    total_cells = grid.rows * grid.cols
    occupied = grid.occupied_count()
    pieces = grid.pieces()
    lengths = Counter(piece.size for piece in pieces.values())
    directions = Counter(piece.direction.name for piece in pieces.values())

    print(file=stream)
    print("--- Board ---", file=stream)
    print(f"  Size:          {grid.rows} x {grid.cols} ({total_cells} cells)", file=stream)
    print(f"  Occupied:      {occupied} ({occupied / total_cells * 100:.0f}%)", file=stream)
    print(f"  Arrows:        {len(pieces)}", file=stream)
    print(f"  Free now:      {len(exitable_heads(grid))}", file=stream)
    if lengths:
        dist_parts = [f"{l}:{c}" for l, c in sorted(lengths.items())]
        print(f"  Lengths:       {' '.join(dist_parts)}", file=stream)
        dir_parts = [f"{d}:{c}" for d, c in sorted(directions.items())]
        print(f"  Directions:    {' '.join(dir_parts)}", file=stream)

    print(file=stream)
    print("--- Generation ---", file=stream)
    print(f"  Attempts:      {result.attempts}", file=stream)
    if result.is_fallback:
        print("  Fallback:      yes", file=stream)
    if result.solution is not None:
        print(f"  Solution:      {len(result.solution)} moves", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
