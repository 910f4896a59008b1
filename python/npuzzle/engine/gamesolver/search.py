"""Bidirectional breadth-first search with meet-in-the-middle detection.

One frontier grows from the start board, the other from the goal.  Each
layer expands whichever side has fewer boards waiting, which keeps the total
work near ``O(b^(d/2))`` with branching factor ``b <= 4``.  As soon as a
neighbour generated on one side is already known to the other side the two
predecessor chains are joined, replayed and returned.

All maps live for exactly one :meth:`BidirectionalSearch.solve` call.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field

from npuzzle.engine.gamesolver.reconstruct import SEED, Predecessor, reconstruct
from npuzzle.engine.movegen import legal_moves
from npuzzle.errors import InvalidBoard, SearchExhausted
from npuzzle.log import get_logger
from npuzzle.models.board import Board, Move

log = get_logger("search")


@dataclass
class _Side:
    """Frontier and visited map owned by one search direction."""

    name: str
    frontier: deque[bytes] = field(default_factory=deque)
    visited: dict[bytes, Predecessor] = field(default_factory=dict)

    def seed(self, board: Board, boards: dict[bytes, Board]) -> None:
        key = board.key
        self.frontier.append(key)
        self.visited[key] = SEED
        boards[key] = board


class BidirectionalSearch:
    """Solver for a single start/goal pair.

    Usage::

        moves = BidirectionalSearch(start, Board.goal(3)).solve(max_depth=20)
    """

    def __init__(self, start: Board, goal: Board) -> None:
        if start.size != goal.size:
            raise InvalidBoard(
                f"Start is {start.size}×{start.size} but goal is "
                f"{goal.size}×{goal.size}."
            )
        self.start = start
        self.goal = goal
        self.nodes_expanded = 0

    def solve(self, max_depth: int) -> list[Move]:
        """Return the moves from start to goal found within *max_depth* layers.

        Raises ``SearchExhausted`` when the frontiers have not met by then.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}.")
        if self.start == self.goal:
            return []

        started = time.perf_counter()
        boards: dict[bytes, Board] = {}
        forward = _Side("forward")
        backward = _Side("backward")
        forward.seed(self.start, boards)
        backward.seed(self.goal, boards)
        self.nodes_expanded = 0

        for layer in range(1, max_depth + 1):
            if len(forward.frontier) <= len(backward.frontier):
                meeting_key = self._expand_layer(forward, backward, boards)
            else:
                meeting_key = self._expand_layer(backward, forward, boards)

            log.debug(
                "Layer {}: forward={} backward={} meeting={}",
                layer,
                len(forward.visited),
                len(backward.visited),
                meeting_key is not None,
            )

            if meeting_key is None:
                continue
            path = reconstruct(
                meeting_key,
                forward.visited,
                backward.visited,
                boards,
                self.start,
                self.goal,
            )
            if path is not None:
                log.info(
                    "Found {}-move path after {} layers ({} nodes, {:.3f}s).",
                    len(path),
                    layer,
                    self.nodes_expanded,
                    time.perf_counter() - started,
                )
                return path

        log.warning(
            "No path within {} layers ({} nodes, {:.3f}s).",
            max_depth,
            self.nodes_expanded,
            time.perf_counter() - started,
        )
        raise SearchExhausted(max_depth)

    def _expand_layer(
        self,
        side: _Side,
        other: _Side,
        boards: dict[bytes, Board],
    ) -> bytes | None:
        """Expand every board queued on *side* at the start of this layer.

        Returns the first key found on both sides, if any.  Boards queued
        during the expansion belong to the next layer.
        """
        meeting_key: bytes | None = None
        visited = side.visited
        frontier = side.frontier

        for _ in range(len(frontier)):
            current_key = frontier.popleft()
            current = boards[current_key]
            self.nodes_expanded += 1

            for move in legal_moves(current):
                nxt = current.apply(move)
                key = nxt.key
                if key in visited:
                    continue

                visited[key] = Predecessor(current_key, move)
                boards.setdefault(key, nxt)
                frontier.append(key)

                if meeting_key is None and key in other.visited:
                    meeting_key = key

        return meeting_key
