"""Exceptions raised by the puzzle engine."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error the engine raises on purpose."""


class InvalidBoard(PuzzleError, ValueError):
    """The tiles do not form a permutation of ``0..n²-1`` on a supported grid."""


class IllegalMoveRequested(PuzzleError, ValueError):
    """A move was applied whose endpoints are not the blank and a neighbour."""


class UnsolvableBoard(PuzzleError):
    """The board has the wrong permutation parity to ever reach the goal."""


class SearchExhausted(PuzzleError):
    """Bidirectional search ran out of layers without the frontiers meeting."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"No path found within {max_depth} layers.")
        self.max_depth = max_depth
