"""CLI entrypoint for the sliding-arrow exit puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from arrowpuzzle.core.constants import (
    DEFAULT_COLS,
    DEFAULT_DENSITY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MAX_STATES,
    DEFAULT_ROWS,
)
from arrowpuzzle.core.exceptions import GridFormatError
from arrowpuzzle.engine.generator import CERTIFIERS, GeneratorConfig, LevelGenerator
from arrowpuzzle.engine.grid import ArrowGrid
from arrowpuzzle.engine.hints import find_hint
from arrowpuzzle.engine.solver import search
from arrowpuzzle.utils.logger import configure_logging
from arrowpuzzle.utils.pretty import pretty_print_grid, print_level_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate sliding-arrow exit puzzles",
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Board height in cells (2-12)")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Board width in cells (2-12)")
    parser.add_argument(
        "--density",
        type=float,
        default=DEFAULT_DENSITY,
        help="Chance that an empty cell starts a piece (0-0.9)",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        default=DEFAULT_MAX_LENGTH,
        help="Longest piece, in cells (1-4)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help="Random boards to try before falling back to the fixed layout",
    )
    parser.add_argument(
        "--max-states",
        type=int,
        default=DEFAULT_MAX_STATES,
        help="Search budget, in explored states, when certifying a board",
    )
    parser.add_argument(
        "--certifier",
        type=str,
        choices=list(CERTIFIERS),
        default="bfs",
        help="How candidate boards are proven solvable",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--solve",
        type=Path,
        metavar="FILE",
        help="Solve a board stored as JSON (the 'grid' payload) instead of generating one",
    )
    parser.add_argument("--show-solution", action="store_true", help="Print the certified move list")
    parser.add_argument("--hint", action="store_true", help="Print the first immediately legal move")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def load_grid(path: Path) -> ArrowGrid:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data["grid"]
    return ArrowGrid.from_jsonable(data)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.solve:
        try:
            grid = load_grid(args.solve)
        except (OSError, KeyError, TypeError, json.JSONDecodeError, GridFormatError) as exc:
            parser.error(f"Could not load board from {args.solve}: {exc!r}")
        outcome = search(grid, args.max_states)
        pretty_print_grid(grid)
        if outcome.solution is None:
            print(f"No solution within {args.max_states} states (explored {outcome.explored})")
        else:
            moves = " ".join(f"({m.row},{m.col})" for m in outcome.solution)
            print(f"Solution ({len(outcome.solution)} moves): {moves}")
        return

    config = GeneratorConfig(
        rows=args.rows,
        cols=args.cols,
        density=args.density,
        max_length=args.max_length,
        max_attempts=args.max_attempts,
        max_states=args.max_states,
        seed=args.seed,
        certifier=args.certifier,
    ).clamped()

    result = LevelGenerator(config).generate_level()
    hint = find_hint(result.grid)

    payload: Dict[str, Any] = {
        "rows": result.grid.rows,
        "cols": result.grid.cols,
        "grid": result.grid.to_jsonable(),
        "attempts": result.attempts,
        "fallback": result.is_fallback,
        "seed": result.seed,
    }
    if args.show_solution:
        payload["solution"] = [list(move) for move in result.solution or []]
    if args.hint:
        payload["hint"] = list(hint) if hint is not None else None

    print_level_stats(result)
    if args.output:
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        if args.show_solution and result.solution is not None:
            moves = " ".join(f"({m.row},{m.col})" for m in result.solution)
            print(f"Solution: {moves}")
        if args.hint:
            print(f"Hint: {tuple(hint)}" if hint is not None else "Hint: no arrow can exit directly")


if __name__ == "__main__":  # pragma: no cover
    main()
