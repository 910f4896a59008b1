"""Sliding puzzle solver."""

from __future__ import annotations

from npuzzle.config import DEFAULT_CONFIG, PuzzleConfig
from npuzzle.engine.gamesolver.search import BidirectionalSearch
from npuzzle.errors import SearchExhausted, UnsolvableBoard
from npuzzle.models.board import Board, Move


class Solver:
    """Stateless solver; all methods are static."""

    @staticmethod
    def solve(
        board: Board,
        max_depth: int | None = None,
        config: PuzzleConfig = DEFAULT_CONFIG,
    ) -> list[Move]:
        """Return a move sequence that solves *board*, ``[]`` if already solved.

        *max_depth* defaults to the configured solve depth for the board's
        size.  Raises ``UnsolvableBoard`` for boards of the wrong parity and
        ``SearchExhausted`` when no path is found within the bound.
        """
        if board.is_solved():
            return []

        if not Solver.is_solvable(board):
            raise UnsolvableBoard(f"{board!r} cannot reach the goal.")

        if max_depth is None:
            max_depth = config.solve_depth(board.size)
        return BidirectionalSearch(board, Board.goal(board.size)).solve(max_depth)

    @staticmethod
    def hint(
        board: Board,
        max_depth: int | None = None,
        config: PuzzleConfig = DEFAULT_CONFIG,
    ) -> Move | None:
        """Return the first move of a solution, or ``None`` if there is none.

        *max_depth* defaults to ``config.hint_depth``.
        """
        if board.is_solved() or not Solver.is_solvable(board):
            return None
        if max_depth is None:
            max_depth = config.hint_depth

        try:
            moves = Solver.solve(board, max_depth, config)
        except SearchExhausted:
            return None

        return moves[0] if moves else None

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state.

        Odd widths need an even number of inversions; even widths also
        count the blank's row from the bottom.
        """
        flat = [v for v in board.tiles if v != 0]
        inversions = 0
        for i in range(len(flat)):
            for j in range(i + 1, len(flat)):
                if flat[i] > flat[j]:
                    inversions += 1
        if board.size % 2 == 1:
            return inversions % 2 == 0
        blank_row_from_bottom = board.size - 1 - board.blank_pos[0]
        return (inversions + blank_row_from_bottom) % 2 == 0
