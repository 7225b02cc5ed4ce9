import random
import unittest

from arrowpuzzle.core.constants import Direction
from arrowpuzzle.core.models import Move, Segment
from arrowpuzzle.engine.exits import blocking_pieces, can_exit, exitable_heads
from arrowpuzzle.engine.generator import GeneratorConfig, LevelGenerator, fallback_grid
from arrowpuzzle.engine.grid import ArrowGrid
from arrowpuzzle.engine.hints import find_hint


class ExitPredicateTests(unittest.TestCase):
    def test_single_piece_reaches_edge(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.place_piece(1, 0, 0, Direction.RIGHT, 1)
        self.assertTrue(can_exit(grid, 0, 0))

    def test_facing_pieces_block_each_other(self) -> None:
        grid = ArrowGrid.empty(2, 2)
        grid.place_piece(1, 0, 0, Direction.RIGHT, 1)
        grid.place_piece(2, 0, 1, Direction.LEFT, 1)
        self.assertFalse(can_exit(grid, 0, 0))
        self.assertFalse(can_exit(grid, 0, 1))
        self.assertEqual(blocking_pieces(grid, 0, 0), {2})
        self.assertEqual(exitable_heads(grid), [])

    def test_far_blocker_on_ray_blocks(self) -> None:
        grid = ArrowGrid.empty(5, 5)
        grid.place_piece(1, 4, 2, Direction.UP, 1)
        grid.place_piece(2, 0, 2, Direction.LEFT, 1)
        self.assertFalse(can_exit(grid, 4, 2))
        self.assertTrue(can_exit(grid, 0, 2))

    def test_pieces_beside_the_ray_do_not_block(self) -> None:
        grid = ArrowGrid.empty(3, 3)
        grid.place_piece(1, 1, 0, Direction.RIGHT, 1)
        grid.place_piece(2, 0, 2, Direction.RIGHT, 1)
        grid.place_piece(3, 2, 2, Direction.RIGHT, 1)
        self.assertTrue(can_exit(grid, 1, 0))

    def test_own_segments_do_not_block(self) -> None:
        grid = fallback_grid(3, 4)
        self.assertTrue(can_exit(grid, 0, 0))

    def test_non_heads_are_not_exitable(self) -> None:
        grid = ArrowGrid.empty(3, 3)
        grid.place_piece(1, 0, 2, Direction.RIGHT, 3)
        self.assertFalse(can_exit(grid, 0, 1))
        self.assertFalse(can_exit(grid, 2, 2))
        self.assertFalse(can_exit(grid, -1, 0))
        self.assertFalse(can_exit(grid, 0, 3))

    def test_exitable_heads_are_row_major(self) -> None:
        grid = ArrowGrid.empty(3, 3)
        grid.place_piece(1, 2, 0, Direction.DOWN, 1)
        grid.place_piece(2, 0, 2, Direction.UP, 1)
        grid.place_piece(3, 1, 1, Direction.LEFT, 1)
        self.assertEqual(exitable_heads(grid), [Move(0, 2), Move(1, 1), Move(2, 0)])

    def test_matches_blocker_set_on_random_boards(self) -> None:
        rng = random.Random(99)
        for seed in range(25):
            config = GeneratorConfig(
                rows=rng.randint(2, 8),
                cols=rng.randint(2, 8),
                density=0.6,
                max_length=4,
                seed=seed,
            )
            candidate = LevelGenerator(config)._build_candidate()
            for r, c, _ in candidate.head_cells():
                self.assertEqual(can_exit(candidate, r, c), not blocking_pieces(candidate, r, c))


class RaggedGridTests(unittest.TestCase):
    def test_short_row_answers_negatively(self) -> None:
        grid = ArrowGrid(2, 2, [[Segment(1, Direction.RIGHT, 1, is_head=True)], [None, None]])
        self.assertFalse(grid.is_rectangular)
        self.assertFalse(can_exit(grid, 0, 0))
        self.assertEqual(blocking_pieces(grid, 0, 0), set())
        self.assertEqual(exitable_heads(grid), [])
        self.assertIsNone(find_hint(grid))

    def test_missing_row_answers_negatively(self) -> None:
        grid = ArrowGrid(3, 2, [[Segment(1, Direction.UP, 1, is_head=True), None]])
        self.assertFalse(can_exit(grid, 0, 0))
        self.assertFalse(can_exit(grid, 2, 1))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
