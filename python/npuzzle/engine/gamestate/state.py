"""Per-round state: board, player move count, phase and clock."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum

from npuzzle.models.board import Board


class Phase(StrEnum):
    IDLE = "idle"
    PLAYBACK = "playback"
    SOLVED = "solved"


@dataclass
class GameState:
    """One round of play.

    ``IDLE -> PLAYBACK -> IDLE | SOLVED``.  The clock stops on the win.
    """

    board: Board
    moves: int = 0
    phase: Phase = Phase.IDLE
    started: float = field(default_factory=time.monotonic)
    finished: float | None = None

    def __post_init__(self) -> None:
        if self.board.is_solved():
            self.phase = Phase.SOLVED
            self.finished = self.started

    @property
    def elapsed_time(self) -> float:
        end = time.monotonic() if self.finished is None else self.finished
        return end - self.started

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()

    def record_player_move(self, board: Board) -> None:
        self.board = board
        self.moves += 1

    def begin_playback(self) -> None:
        self.phase = Phase.PLAYBACK

    def end_playback(self) -> None:
        self.phase = Phase.IDLE

    def settle(self) -> bool:
        """Enter ``SOLVED`` if an idle round sits on the goal; True on the transition."""
        if self.phase is not Phase.IDLE or not self.board.is_solved():
            return False
        self.phase = Phase.SOLVED
        self.finished = time.monotonic()
        return True
