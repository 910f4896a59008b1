"""Last-resort solution: undo a freshly recorded shuffle."""

from __future__ import annotations

import random
from dataclasses import dataclass

from npuzzle.engine.gamegenerator import GameGenerator
from npuzzle.log import get_logger
from npuzzle.models.board import Board, Move

log = get_logger("search")


@dataclass(frozen=True)
class FallbackPlan:
    """A board together with moves that are known to bring it to the goal."""

    start: Board
    moves: list[Move]


def fallback_solve(
    goal: Board, depth: int, rng: random.Random | None = None
) -> FallbackPlan:
    """Shuffle *goal* by *depth* moves and return the inverse of that shuffle.

    The moves only solve ``plan.start``, the shuffle's end point, so the
    caller has to adopt that board before playing them back.
    """
    if depth < 1:
        raise ValueError(f"Fallback depth must be at least 1, got {depth}.")
    start, shuffle_path = GameGenerator.shuffle_with_path(goal, depth, rng)
    moves = [move.reversed() for move in reversed(shuffle_path)]
    log.info("Fallback path of {} moves from a fresh shuffle.", len(moves))
    return FallbackPlan(start=start, moves=moves)
