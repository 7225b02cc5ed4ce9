"""Grid representation and helper utilities."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import Bounds, Direction
from ..core.exceptions import GridFormatError, PlacementError
from ..core.models import Piece, Segment
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

CellRow = List[Optional[Segment]]


class ArrowGrid:
    """Fixed-size board of piece segments.

    Empty cells hold ``None``. Segments are frozen, so :meth:`clone` only
    needs to copy the row lists to give the copy independent occupancy.
    """

    def __init__(self, rows: int, cols: int, cells: Optional[List[CellRow]] = None) -> None:
        self.bounds = Bounds(rows=rows, cols=cols)
        if cells is None:
            cells = [[None for _ in range(cols)] for _ in range(rows)]
        self.cells: List[CellRow] = cells
        self.is_rectangular = len(cells) == rows and all(len(row) == cols for row in cells)
        if not self.is_rectangular:
            LOGGER.warning("Grid rows do not match declared shape %sx%s", rows, cols)

    @classmethod
    def empty(cls, rows: int, cols: int) -> "ArrowGrid":
        return cls(rows, cols)

    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Optional[Segment]:
        return self.cells[row][col]

    def is_empty(self) -> bool:
        return all(cell is None for row in self.cells for cell in row)

    def occupied_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is not None)

    def head_cells(self) -> Iterator[Tuple[int, int, Segment]]:
        """Yield ``(row, col, segment)`` for every head, in row-major order."""

        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell is not None and cell.is_head:
                    yield r, c, cell

    def head_count(self) -> int:
        return sum(1 for _ in self.head_cells())

    def pieces(self) -> Dict[int, Piece]:
        """Collect the derived piece views by scanning the board."""

        pieces: Dict[int, Piece] = {}
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell is None:
                    continue
                piece = pieces.get(cell.piece_id)
                if piece is None:
                    piece = Piece(id=cell.piece_id, direction=cell.direction, length=cell.length)
                    pieces[cell.piece_id] = piece
                piece.cells.append((r, c))
                if cell.is_head:
                    piece.head = (r, c)
                    piece.head_count += 1
        return pieces

    def footprint(
        self, head_row: int, head_col: int, direction: Direction, length: int
    ) -> Optional[List[Tuple[int, int]]]:
        """Cells a piece would cover, head first, or ``None`` if it does not fit.

        The body trails behind the head, opposite to ``direction``.
        """

        dr, dc = direction.step
        coords: List[Tuple[int, int]] = []
        for k in range(length):
            r, c = head_row - dr * k, head_col - dc * k
            if not self.bounds.contains(r, c) or self.cells[r][c] is not None:
                return None
            coords.append((r, c))
        return coords

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_segment(self, row: int, col: int, segment: Optional[Segment]) -> None:
        if not self.bounds.contains(row, col):
            raise PlacementError(f"Cell outside bounds: {(row, col)}")
        self.cells[row][col] = segment

    def place_piece(
        self,
        piece_id: int,
        head_row: int,
        head_col: int,
        direction: Direction,
        length: int,
    ) -> List[Tuple[int, int]]:
        coords = self.footprint(head_row, head_col, direction, length)
        if coords is None:
            raise PlacementError(
                f"Piece {piece_id} ({direction.name}, len {length}) does not fit at "
                f"{(head_row, head_col)}"
            )
        for index, (r, c) in enumerate(coords):
            self.cells[r][c] = Segment(
                piece_id=piece_id,
                direction=direction,
                length=length,
                is_head=index == 0,
            )
        return coords

    def remove_piece(self, piece_id: int) -> int:
        """Clear every cell holding ``piece_id``; returns the number cleared."""

        removed = 0
        for row in self.cells:
            for c, cell in enumerate(row):
                if cell is not None and cell.piece_id == piece_id:
                    row[c] = None
                    removed += 1
        return removed

    def without_piece(self, piece_id: int) -> "ArrowGrid":
        successor = self.clone()
        successor.remove_piece(piece_id)
        return successor

    def clone(self) -> "ArrowGrid":
        return ArrowGrid(self.rows, self.cols, [list(row) for row in self.cells])

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> List[List[Optional[dict]]]:
        serialized: List[List[Optional[dict]]] = []
        for row in self.cells:
            serialized_row: List[Optional[dict]] = []
            for cell in row:
                if cell is None:
                    serialized_row.append(None)
                    continue
                serialized_row.append(
                    {
                        "id": cell.piece_id,
                        "dir": cell.direction.value,
                        "len": cell.length,
                        "head": cell.is_head,
                    }
                )
            serialized.append(serialized_row)
        return serialized

    @classmethod
    def from_jsonable(cls, data: Sequence[Sequence[Any]]) -> "ArrowGrid":
        if not data or not data[0]:
            raise GridFormatError("Grid must have at least one row and one column")
        cols = len(data[0])
        cells: List[CellRow] = []
        for r, raw_row in enumerate(data):
            if len(raw_row) != cols:
                raise GridFormatError(
                    f"Row {r} has {len(raw_row)} cells, expected {cols}"
                )
            cells.append([_parse_cell(raw, r, c) for c, raw in enumerate(raw_row)])
        grid = cls(len(cells), cols, cells)
        LOGGER.debug("Loaded %sx%s grid with %d pieces", grid.rows, grid.cols, len(grid.pieces()))
        return grid

    def __repr__(self) -> str:
        return f"ArrowGrid(rows={self.rows}, cols={self.cols}, occupied={self.occupied_count()})"


def _parse_cell(raw: Any, row: int, col: int) -> Optional[Segment]:
    if raw is None:
        return None
    try:
        segment = Segment(
            piece_id=int(raw["id"]),
            direction=Direction(raw["dir"]),
            length=int(raw["len"]),
            is_head=bool(raw.get("head", False)),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise GridFormatError(f"Malformed cell at {(row, col)}: {raw!r}") from exc
    if segment.piece_id < 1 or segment.length < 1:
        raise GridFormatError(f"Invalid piece id or length at {(row, col)}: {raw!r}")
    return segment
