"""Game session: player moves, events, hints, solve playback, fallback."""

from __future__ import annotations

import random

import pytest

from npuzzle.config import PuzzleConfig
from npuzzle.engine.gameplay import GamePlay
from npuzzle.engine.gamestate import EventBus, GameEvent, GameState, Phase
from npuzzle.models.board import Board, Direction, Move


class Recorder:
    def __init__(self) -> None:
        self.events: list[tuple[GameEvent, dict]] = []

    def __call__(self, event: GameEvent, **data) -> None:
        self.events.append((event, data))

    @property
    def names(self) -> list[GameEvent]:
        return [event for event, _ in self.events]


def _game(board: Board, **kwargs) -> tuple[GamePlay, Recorder]:
    game = GamePlay.from_board(board, rng=random.Random(5), **kwargs)
    recorder = Recorder()
    game.bus.subscribe(recorder)
    return game, recorder


# -- sessions -----------------------------------------------------------------


def test_new_session_is_shuffled() -> None:
    game = GamePlay(4, rng=random.Random(8))
    assert game.size == 4
    assert not game.is_won
    assert game.state.phase is Phase.IDLE


def test_unsupported_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        GamePlay(9)


def test_new_game_and_resize_emit_events(two_moves_from_goal: Board) -> None:
    game, rec = _game(two_moves_from_goal)
    game.set_size(4)
    assert game.size == 4
    assert game.board.size == 4
    game.set_size(4)  # same size: nothing happens
    assert rec.names == [GameEvent.NEW_GAME]


# -- player moves -------------------------------------------------------------


def test_player_solves_by_click_and_key(two_moves_from_goal: Board) -> None:
    game, rec = _game(two_moves_from_goal)
    assert game.move_tile(7)
    assert game.move(Direction.LEFT)
    assert game.is_won
    assert game.state.moves == 2
    assert game.state.finished is not None
    assert rec.names == [GameEvent.MOVED, GameEvent.MOVED, GameEvent.SOLVED]
    assert rec.events[0][1]["player"] is True


def test_illegal_player_moves_are_refused(two_moves_from_goal: Board) -> None:
    game, rec = _game(two_moves_from_goal)
    assert not game.move_tile(0)  # not adjacent
    assert not game.move_tile(6)  # the blank itself
    assert not game.move_tile(42)  # off the board
    assert not game.move(Direction.RIGHT)  # no tile left of the blank
    assert game.state.moves == 0
    assert rec.events == []


def test_moves_after_the_win_are_refused(goal3: Board) -> None:
    game, _ = _game(goal3)
    assert game.is_won
    assert not game.move(Direction.DOWN)


# -- assistance ---------------------------------------------------------------


def test_hint_peeks_without_moving(two_moves_from_goal: Board) -> None:
    game, rec = _game(two_moves_from_goal)
    assert game.hint() == Move(6, 7)
    assert game.board == two_moves_from_goal
    assert rec.names == [GameEvent.HINT]


def test_solve_plays_back_one_move_per_step(six_moves_from_goal: Board) -> None:
    game, rec = _game(six_moves_from_goal)
    playback = game.solve()
    assert playback is not None
    assert len(playback.moves) == 6
    assert game.is_playing_back
    assert game.state.phase is Phase.PLAYBACK

    # The player is locked out while the solver drives the board.
    assert not game.move_tile(playback.peek().target)
    assert game.hint() is None
    assert game.solve() is None

    boards = list(playback)
    assert len(boards) == 6
    assert boards[-1].is_solved()
    assert playback.done and playback.remaining == 0
    assert game.is_won
    assert game.playback is None
    assert game.state.moves == 0  # playback moves are not the player's
    assert rec.names[0] == GameEvent.SOLVE_REQUESTED
    assert rec.names[1] == GameEvent.PLAYBACK_STARTED
    assert rec.names[-2:] == [GameEvent.PLAYBACK_FINISHED, GameEvent.SOLVED]


def test_playback_can_be_cancelled_between_moves(six_moves_from_goal: Board) -> None:
    game, rec = _game(six_moves_from_goal)
    playback = game.solve()
    assert playback is not None
    first = playback.peek()
    next(playback)
    assert playback.applied == 1
    assert playback.remaining == 5
    playback.cancel()

    assert playback.cancelled and playback.done
    assert next(playback, None) is None
    assert game.state.phase is Phase.IDLE
    assert not game.is_playing_back
    assert game.board == six_moves_from_goal.apply(first)
    finished = [data for event, data in rec.events if event == GameEvent.PLAYBACK_FINISHED]
    assert finished == [{"cancelled": True}]
    # Control is back with the player.
    assert game.move_tile(first.blank)


def test_exhausted_search_falls_back_to_reversed_shuffle(
    six_moves_from_goal: Board,
) -> None:
    config = PuzzleConfig(shuffle_depths={4: 1}, solve_margin=0)
    game, rec = _game(six_moves_from_goal, config=config)
    playback = game.solve()
    assert playback is not None
    assert GameEvent.FALLBACK in rec.names

    fallback = next(data for event, data in rec.events if event == GameEvent.FALLBACK)
    assert game.board == fallback["board"]
    assert game.board != six_moves_from_goal
    list(playback)
    assert game.is_won


def test_unsolvable_board_also_falls_back() -> None:
    board = Board.from_flat(3, [2, 1, 3, 4, 5, 6, 7, 8, 0])
    game, rec = _game(board)
    playback = game.solve()
    assert playback is not None
    assert GameEvent.FALLBACK in rec.names
    list(playback)
    assert game.is_won


def test_new_game_cancels_running_playback(six_moves_from_goal: Board) -> None:
    game, rec = _game(six_moves_from_goal)
    playback = game.solve()
    assert playback is not None
    game.new_game()
    assert playback.cancelled
    assert not game.is_playing_back
    assert rec.names[-1] == GameEvent.NEW_GAME


# -- event bus ----------------------------------------------------------------


def test_unsubscribe_stops_notifications() -> None:
    bus = EventBus()
    rec = Recorder()
    unsubscribe = bus.subscribe(rec)
    bus.emit(GameEvent.HINT)
    unsubscribe()
    unsubscribe()
    bus.emit(GameEvent.HINT)
    assert rec.names == [GameEvent.HINT]


# -- round state --------------------------------------------------------------


def test_state_on_goal_starts_solved_with_stopped_clock(goal3: Board) -> None:
    state = GameState(goal3)
    assert state.phase is Phase.SOLVED
    assert state.elapsed_time == 0.0
    assert not state.settle()


def test_state_settles_only_when_idle(two_moves_from_goal: Board, goal3: Board) -> None:
    state = GameState(two_moves_from_goal)
    state.begin_playback()
    state.board = goal3
    assert not state.settle()
    state.end_playback()
    assert state.settle()
    assert state.phase is Phase.SOLVED
