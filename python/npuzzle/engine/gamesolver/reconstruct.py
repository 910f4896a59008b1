"""Turning two predecessor maps into one checked move list."""

from __future__ import annotations

from typing import Iterable, Mapping, NamedTuple

from npuzzle.errors import IllegalMoveRequested
from npuzzle.log import get_logger
from npuzzle.models.board import Board, Move

log = get_logger("search")


class Predecessor(NamedTuple):
    """How a key was reached; seeds have neither a parent nor a move."""

    key: bytes | None
    move: Move | None


SEED = Predecessor(None, None)

Visited = Mapping[bytes, Predecessor]


def replay(start: Board, moves: Iterable[Move]) -> Board:
    """Apply *moves* in order; raises ``IllegalMoveRequested`` on a bad step."""
    board = start
    for move in moves:
        board = board.apply(move)
    return board


def is_valid_path(start: Board, goal: Board, moves: Iterable[Move]) -> bool:
    try:
        return replay(start, moves) == goal
    except IllegalMoveRequested:
        return False


def _chain(meeting_key: bytes, visited: Visited) -> list[Move]:
    moves: list[Move] = []
    record = visited.get(meeting_key, SEED)
    while record.key is not None:
        moves.append(record.move)
        record = visited.get(record.key, SEED)
    return moves


def reconstruct(
    meeting_key: bytes,
    forward: Visited,
    backward: Visited,
    boards: Mapping[bytes, Board],
    start: Board,
    goal: Board,
) -> list[Move] | None:
    """Join the forward and backward chains through *meeting_key*.

    Forward moves are collected meeting → start and reversed.  Backward
    moves were made walking away from the goal, so each one is flipped and
    they are appended in the order walked (meeting → goal).  The result is
    replayed on *start*; ``None`` is returned if it does not end on *goal*.
    """
    path = _chain(meeting_key, forward)
    path.reverse()
    path.extend(move.reversed() for move in _chain(meeting_key, backward))

    if not is_valid_path(start, goal, path):
        meeting = boards.get(meeting_key)
        log.warning(
            "Reconstruction mismatch at {!r}; discarding {}-move path.",
            meeting if meeting is not None else meeting_key,
            len(path),
        )
        return None
    return path
