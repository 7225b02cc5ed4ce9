import unittest

from arrowpuzzle.core.constants import Direction
from arrowpuzzle.core.models import Segment
from arrowpuzzle.engine.grid import ArrowGrid
from arrowpuzzle.engine.validator import GridValidator


class GridValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = GridValidator()

    def test_well_formed_board_passes(self) -> None:
        grid = ArrowGrid.empty(4, 4)
        grid.place_piece(1, 0, 3, Direction.RIGHT, 3)
        grid.place_piece(2, 3, 0, Direction.DOWN, 2)
        result = self.validator.validate(grid)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_two_heads_fail(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.set_segment(0, 0, Segment(1, Direction.RIGHT, 2, is_head=True))
        grid.set_segment(0, 1, Segment(1, Direction.RIGHT, 2, is_head=True))
        result = self.validator.validate(grid)
        self.assertFalse(result.ok)
        self.assertIn("heads", result.messages[0])

    def test_gap_in_piece_fails(self) -> None:
        grid = ArrowGrid.empty(1, 3)
        grid.set_segment(0, 2, Segment(1, Direction.RIGHT, 2, is_head=True))
        grid.set_segment(0, 0, Segment(1, Direction.RIGHT, 2, is_head=False))
        result = self.validator.validate(grid)
        self.assertFalse(result.ok)
        self.assertIn("contiguous", result.messages[0])

    def test_misaligned_piece_fails(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.set_segment(0, 0, Segment(1, Direction.RIGHT, 2, is_head=True))
        grid.set_segment(1, 0, Segment(1, Direction.RIGHT, 2, is_head=False))
        result = self.validator.validate(grid)
        self.assertFalse(result.ok)
        self.assertIn("aligned", result.messages[0])

    def test_length_mismatch_fails(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.set_segment(0, 0, Segment(1, Direction.UP, 3, is_head=True))
        result = self.validator.validate(grid)
        self.assertFalse(result.ok)
        self.assertIn("length", result.messages[0])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
