"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import random

from npuzzle.config import DEFAULT_CONFIG, PuzzleConfig, validate_size
from npuzzle.engine.movegen import legal_moves
from npuzzle.log import get_logger
from npuzzle.models.board import Board, Move

log = get_logger("generator")


class GameGenerator:
    """Creates solvable puzzles by shuffling from the solved state."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return Board.goal(validate_size(size))

    @staticmethod
    def shuffle(
        goal: Board, depth: int, rng: random.Random | None = None
    ) -> Board:
        """Return *goal* after exactly *depth* random legal moves."""
        board, _ = GameGenerator.shuffle_with_path(goal, depth, rng)
        return board

    @staticmethod
    def shuffle_with_path(
        goal: Board, depth: int, rng: random.Random | None = None
    ) -> tuple[Board, list[Move]]:
        """Shuffle *goal* like :meth:`shuffle` and also return the moves taken.

        The move that would put the blank straight back where it just was
        is dropped whenever another move is available.
        """
        if depth < 0:
            raise ValueError(f"Shuffle depth must not be negative, got {depth}.")
        rng = rng or random.Random()
        board = goal
        path: list[Move] = []
        prev_blank: int | None = None

        for _ in range(depth):
            moves = legal_moves(board)
            if len(moves) > 1:
                moves = [m for m in moves if m.target != prev_blank]
            move = rng.choice(moves)
            prev_blank = move.blank
            board = board.apply(move)
            path.append(move)

        return board, path

    @staticmethod
    def generate(
        size: int,
        config: PuzzleConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
    ) -> Board:
        """Return a random *solvable*, unsolved board of the given size."""
        goal = GameGenerator.solved(size)
        depth = config.shuffle_depth(size)
        if depth == 0:
            return goal
        rng = rng or random.Random()
        log.debug("Shuffling {}x{} board with {} moves.", size, size, depth)

        board = GameGenerator.shuffle(goal, depth, rng)
        # An even depth can wander back onto the goal.
        while board.is_solved():
            board = GameGenerator.shuffle(goal, depth, rng)
        return board
