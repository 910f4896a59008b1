"""Core gameplay logic: player moves, hints, auto-solve and the win check."""

from __future__ import annotations

import random

from npuzzle.config import DEFAULT_CONFIG, PuzzleConfig, validate_size
from npuzzle.engine.gamegenerator import GameGenerator
from npuzzle.engine.gameplay.playback import Playback
from npuzzle.engine.gamesolver import Solver, fallback_solve
from npuzzle.engine.gamestate import EventBus, GameEvent, GameState, Phase
from npuzzle.errors import SearchExhausted, UnsolvableBoard
from npuzzle.log import get_logger
from npuzzle.models.board import Board, Direction, Move

log = get_logger("game")


class GamePlay:
    """Orchestrates a single game session.

    Listeners on :attr:`bus` are told about every move, hint, solve request
    and win.  While a solver path is being played back the player cannot
    move.
    """

    def __init__(
        self,
        size: int,
        config: PuzzleConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.size = validate_size(size)
        self.config = config
        self.rng = rng or random.Random()
        self.bus = bus or EventBus()
        self.playback: Playback | None = None
        self.state = GameState(GameGenerator.generate(size, config, self.rng))

    @classmethod
    def from_board(
        cls,
        board: Board,
        config: PuzzleConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
        bus: EventBus | None = None,
    ) -> GamePlay:
        """Create a game session from an existing board."""
        obj = object.__new__(cls)
        obj.size = board.size
        obj.config = config
        obj.rng = rng or random.Random()
        obj.bus = bus or EventBus()
        obj.playback = None
        obj.state = GameState(board)
        return obj

    # -- session --------------------------------------------------------------

    def new_game(self, size: int | None = None) -> None:
        """Replace the board with a fresh puzzle, optionally of a new size."""
        if self.playback is not None:
            self.playback.cancel()
        if size is not None:
            self.size = validate_size(size)
        self.state = GameState(GameGenerator.generate(self.size, self.config, self.rng))
        log.info("New {}x{} game.", self.size, self.size)
        self.bus.emit(GameEvent.NEW_GAME, board=self.state.board)

    def set_size(self, size: int) -> None:
        if validate_size(size) != self.size:
            self.new_game(size)

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        move = self.state.board.move_for(direction)
        if move is None:
            return False
        return self._player_move(move)

    def move_tile(self, index: int) -> bool:
        """Move the tile at *index* into the adjacent blank.

        Returns True if the tile was adjacent to the blank and the move
        was applied.
        """
        board = self.state.board
        if not board.is_adjacent_to_blank(index):
            return False
        return self._player_move(Move(board.blank, index))

    def _player_move(self, move: Move) -> bool:
        if self.is_playing_back or self.is_won:
            return False
        self.state.record_player_move(self.state.board.apply(move))
        self.bus.emit(GameEvent.MOVED, move=move, board=self.state.board, player=True)
        self._check_solved()
        return True

    # -- assistance -----------------------------------------------------------

    def hint(self) -> Move | None:
        """Return the next move of a solution without applying it."""
        if self.is_won or self.is_playing_back:
            return None
        self.bus.emit(GameEvent.HINT)
        return Solver.hint(self.state.board, config=self.config)

    def solve(self) -> Playback | None:
        """Compute a path to the goal and return a playback for it.

        If the bounded search gives up, or the board can never reach the
        goal, the board is swapped for the end point of a fresh shuffle whose
        reverse is played back instead.
        """
        if self.is_won or self.is_playing_back:
            return None
        self.bus.emit(GameEvent.SOLVE_REQUESTED)

        board = self.state.board
        try:
            moves = Solver.solve(board, config=self.config)
        except (SearchExhausted, UnsolvableBoard) as exc:
            log.warning("Solve failed ({}); falling back to a reversed shuffle.", exc)
            plan = fallback_solve(
                Board.goal(self.size), self.config.solve_depth(self.size), self.rng
            )
            self.state.board = plan.start
            self.bus.emit(GameEvent.FALLBACK, board=plan.start, moves=plan.moves)
            moves = plan.moves

        if not moves:
            return None
        return self.start_playback(moves)

    # -- playback -------------------------------------------------------------

    def start_playback(self, moves: list[Move]) -> Playback:
        if self.playback is not None:
            self.playback.cancel()
        self.playback = Playback(self, moves)
        self.state.begin_playback()
        self.bus.emit(GameEvent.PLAYBACK_STARTED, moves=list(moves))
        return self.playback

    def _apply_playback_move(self, move: Move) -> Board:
        self.state.board = self.state.board.apply(move)
        self.bus.emit(GameEvent.MOVED, move=move, board=self.state.board, player=False)
        return self.state.board

    def _finish_playback(self, playback: Playback) -> None:
        if playback is not self.playback:
            return
        self.playback = None
        self.state.end_playback()
        self.bus.emit(GameEvent.PLAYBACK_FINISHED, cancelled=playback.cancelled)
        self._check_solved()

    def _check_solved(self) -> None:
        if self.state.settle():
            self.bus.emit(GameEvent.SOLVED, moves=self.state.moves)

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def is_playing_back(self) -> bool:
        return self.playback is not None

    @property
    def is_won(self) -> bool:
        return self.state.phase is Phase.SOLVED
