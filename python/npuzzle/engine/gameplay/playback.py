"""Pull-based playback of a solver path."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from npuzzle.models.board import Board, Move

if TYPE_CHECKING:
    from npuzzle.engine.gameplay.game import GamePlay


class Playback:
    """Iterator that applies one move of a path per ``next()`` call.

    The caller owns the timing: a frontend pulls a move, redraws, waits,
    and pulls again.  Stopping between two moves is always safe because
    every move is a complete transition; :meth:`cancel` hands control back
    to the player.
    """

    def __init__(self, game: GamePlay, moves: Sequence[Move]) -> None:
        if not moves:
            raise ValueError("Nothing to play back.")
        self._game = game
        self._moves = tuple(moves)
        self._index = 0
        self._done = False
        self.cancelled = False

    def __iter__(self) -> Playback:
        return self

    def __next__(self) -> Board:
        if self._done:
            raise StopIteration
        move = self._moves[self._index]
        self._index += 1
        board = self._game._apply_playback_move(move)
        if self._index == len(self._moves):
            self._finish()
        return board

    # -- queries --------------------------------------------------------------

    @property
    def moves(self) -> tuple[Move, ...]:
        return self._moves

    @property
    def applied(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return 0 if self._done else len(self._moves) - self._index

    @property
    def done(self) -> bool:
        return self._done

    def peek(self) -> Move | None:
        """The next move without applying it."""
        if self._done:
            return None
        return self._moves[self._index]

    # -- control --------------------------------------------------------------

    def cancel(self) -> None:
        if self._done:
            return
        self.cancelled = True
        self._finish()

    def _finish(self) -> None:
        self._done = True
        self._game._finish_playback(self)
