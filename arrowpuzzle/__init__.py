"""Sliding-arrow exit puzzle engine.

This package exposes the public API surface via:

- ``arrowpuzzle.engine.generator.LevelGenerator``: builds certified random levels.
- ``arrowpuzzle.engine.exits.can_exit``: the exit predicate.
- ``arrowpuzzle.engine.solver.solve``: bounded breadth-first solver.
- ``arrowpuzzle.engine.hints.find_hint``: first immediately legal move.
"""

from .core.models import Move
from .engine.canonical import canonical_key
from .engine.exits import can_exit
from .engine.generator import GeneratorConfig, LevelGenerator, generate, generate_async
from .engine.grid import ArrowGrid
from .engine.hints import find_hint
from .engine.session import PlaySession
from .engine.solver import solve

__all__ = [
    "ArrowGrid",
    "GeneratorConfig",
    "LevelGenerator",
    "Move",
    "PlaySession",
    "can_exit",
    "canonical_key",
    "find_hint",
    "generate",
    "generate_async",
    "solve",
]

__version__ = "0.1.0"
