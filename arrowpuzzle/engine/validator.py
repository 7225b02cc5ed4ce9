"""Deterministic integrity checks for generated boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .grid import ArrowGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over a board."""

    def validate(self, grid: ArrowGrid) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_rectangular(grid)
            self._check_pieces(grid)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_rectangular(self, grid: ArrowGrid) -> None:
        if len(grid.cells) != grid.rows:
            raise ValidationError(f"Expected {grid.rows} rows, found {len(grid.cells)}")
        for r, row in enumerate(grid.cells):
            if len(row) != grid.cols:
                raise ValidationError(f"Row {r} has {len(row)} cells, expected {grid.cols}")

    def _check_pieces(self, grid: ArrowGrid) -> None:
        for piece in grid.pieces().values():
            if piece.id < 1:
                raise ValidationError(f"Piece id {piece.id} must be positive")
            if piece.head_count != 1:
                raise ValidationError(
                    f"Piece {piece.id} has {piece.head_count} heads, expected exactly one"
                )
            if piece.size != piece.length:
                raise ValidationError(
                    f"Piece {piece.id} covers {piece.size} cells but declares length {piece.length}"
                )
            for r, c in piece.cells:
                cell = grid.cell(r, c)
                if cell.direction != piece.direction or cell.length != piece.length:
                    raise ValidationError(
                        f"Piece {piece.id} has inconsistent segment at {(r, c)}"
                    )
            self._check_straight_run(piece.id, piece.cells, piece.direction.step)

    @staticmethod
    def _check_straight_run(piece_id, cells, step) -> None:
        dr, dc = step
        if dr == 0:
            lanes = {r for r, _ in cells}
            line = sorted(c for _, c in cells)
        else:
            lanes = {c for _, c in cells}
            line = sorted(r for r, _ in cells)
        if len(lanes) != 1:
            raise ValidationError(f"Piece {piece_id} is not aligned with its direction")
        if line != list(range(line[0], line[0] + len(line))):
            raise ValidationError(f"Piece {piece_id} is not contiguous: {cells}")
