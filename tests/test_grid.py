import unittest

from arrowpuzzle.core.constants import Direction
from arrowpuzzle.core.exceptions import GridFormatError, PlacementError
from arrowpuzzle.core.models import Segment
from arrowpuzzle.engine.canonical import canonical_key
from arrowpuzzle.engine.grid import ArrowGrid


class GridPlacementTests(unittest.TestCase):
    def test_place_piece_trails_body_behind_head(self) -> None:
        grid = ArrowGrid.empty(3, 4)
        coords = grid.place_piece(7, 1, 3, Direction.RIGHT, 3)
        self.assertEqual(coords, [(1, 3), (1, 2), (1, 1)])
        self.assertTrue(grid.cell(1, 3).is_head)
        self.assertFalse(grid.cell(1, 2).is_head)
        self.assertEqual(grid.cell(1, 1), Segment(7, Direction.RIGHT, 3, is_head=False))

    def test_footprint_rejects_out_of_bounds_and_overlap(self) -> None:
        grid = ArrowGrid.empty(3, 3)
        self.assertIsNone(grid.footprint(0, 0, Direction.DOWN, 2))
        grid.place_piece(1, 2, 1, Direction.UP, 1)
        self.assertIsNone(grid.footprint(0, 1, Direction.UP, 3))
        self.assertEqual(grid.footprint(2, 2, Direction.DOWN, 3), [(2, 2), (1, 2), (0, 2)])

    def test_place_piece_raises_on_overlap(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.place_piece(1, 0, 0, Direction.LEFT, 1)
        with self.assertRaises(PlacementError):
            grid.place_piece(2, 0, 1, Direction.RIGHT, 2)

    def test_pieces_view_collects_segments(self) -> None:
        grid = ArrowGrid.empty(4, 4)
        grid.place_piece(3, 3, 0, Direction.DOWN, 3)
        grid.place_piece(4, 0, 3, Direction.LEFT, 1)
        pieces = grid.pieces()
        self.assertEqual(sorted(pieces), [3, 4])
        self.assertEqual(pieces[3].head, (3, 0))
        self.assertEqual(sorted(pieces[3].cells), [(1, 0), (2, 0), (3, 0)])
        self.assertEqual(pieces[3].head_count, 1)
        self.assertEqual(grid.head_count(), 2)


class GridCopyTests(unittest.TestCase):
    def test_clone_is_independent(self) -> None:
        grid = ArrowGrid.empty(2, 3)
        grid.place_piece(1, 0, 2, Direction.RIGHT, 2)
        copy = grid.clone()
        copy.remove_piece(1)
        self.assertTrue(copy.is_empty())
        self.assertEqual(grid.occupied_count(), 2)

    def test_remove_piece_clears_every_segment(self) -> None:
        grid = ArrowGrid.empty(3, 3)
        grid.place_piece(1, 2, 2, Direction.DOWN, 3)
        grid.place_piece(2, 0, 0, Direction.UP, 1)
        self.assertEqual(grid.remove_piece(1), 3)
        self.assertEqual(canonical_key(grid), "2,0,0;0,0,0;0,0,0")

    def test_without_piece_leaves_original_untouched(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.place_piece(5, 1, 1, Direction.DOWN, 1)
        successor = grid.without_piece(5)
        self.assertTrue(successor.is_empty())
        self.assertFalse(grid.is_empty())


class GridSerializationTests(unittest.TestCase):
    def test_jsonable_round_trip(self) -> None:
        grid = ArrowGrid.empty(2, 3)
        grid.place_piece(2, 1, 0, Direction.LEFT, 2)
        payload = grid.to_jsonable()
        self.assertEqual(payload[1][0], {"id": 2, "dir": "L", "len": 2, "head": True})
        self.assertIsNone(payload[0][0])
        restored = ArrowGrid.from_jsonable(payload)
        self.assertEqual(restored.to_jsonable(), payload)

    def test_ragged_rows_are_rejected(self) -> None:
        with self.assertRaises(GridFormatError):
            ArrowGrid.from_jsonable([[None, None], [None]])

    def test_bad_direction_is_rejected(self) -> None:
        with self.assertRaises(GridFormatError):
            ArrowGrid.from_jsonable([[{"id": 1, "dir": "X", "len": 1, "head": True}]])

    def test_empty_payload_is_rejected(self) -> None:
        with self.assertRaises(GridFormatError):
            ArrowGrid.from_jsonable([])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
