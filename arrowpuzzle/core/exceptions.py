"""Custom exception hierarchy for the arrow puzzle engine."""


class PuzzleError(Exception):
    """Base exception for puzzle engine failures."""


class GridFormatError(PuzzleError):
    """Raised when a serialized grid cannot be parsed."""


class PlacementError(PuzzleError):
    """Raised when a piece cannot be placed without overlapping or leaving the board."""


class ValidationError(PuzzleError):
    """Raised when the grid integrity checks fail."""


class MoveError(PuzzleError):
    """Raised when a replayed move names a head that cannot exit."""
