"""Solver test suite.

Every returned move list is replayed through the real game engine to
verify it is legal from start to finish and ends on the goal.
"""

from __future__ import annotations

import random

import pytest

import npuzzle.engine.gamesolver.search as search_module
from npuzzle.config import PuzzleConfig
from npuzzle.engine.gamegenerator import GameGenerator
from npuzzle.engine.gameplay import GamePlay
from npuzzle.engine.gamesolver import (
    BidirectionalSearch,
    Predecessor,
    Solver,
    fallback_solve,
    is_valid_path,
    reconstruct,
    replay,
)
from npuzzle.errors import InvalidBoard, SearchExhausted, UnsolvableBoard
from npuzzle.models.board import Board, Move


# -- helpers ------------------------------------------------------------------


def _assert_solves(board: Board, moves: list[Move]) -> None:
    """Apply *moves* through a game session and check the win."""
    game = GamePlay.from_board(board)
    for i, move in enumerate(moves):
        assert move.blank == game.board.blank, f"Move {i} {move} starts off the blank"
        ok = game.move_tile(move.target)
        assert ok, f"Move {i} {move} was invalid at blank {game.board.blank}"
    assert game.is_won, f"Board not solved after {len(moves)} moves"


# -- bidirectional search -----------------------------------------------------


def test_two_move_board(two_moves_from_goal: Board, goal3: Board) -> None:
    moves = BidirectionalSearch(two_moves_from_goal, goal3).solve(max_depth=10)
    assert moves == [Move(6, 7), Move(7, 8)]


def test_already_solved_board_needs_no_moves(goal3: Board) -> None:
    assert BidirectionalSearch(goal3, Board.goal(3)).solve(max_depth=10) == []


def test_six_move_board_is_solved_optimally(
    six_moves_from_goal: Board, goal4: Board
) -> None:
    moves = BidirectionalSearch(six_moves_from_goal, goal4).solve(max_depth=20)
    assert len(moves) == 6
    _assert_solves(six_moves_from_goal, moves)


def test_depth_bound_exhausts_then_fallback_still_solves(
    six_moves_from_goal: Board, goal4: Board
) -> None:
    with pytest.raises(SearchExhausted) as excinfo:
        BidirectionalSearch(six_moves_from_goal, goal4).solve(max_depth=1)
    assert excinfo.value.max_depth == 1

    plan = fallback_solve(goal4, 20, random.Random(3))
    assert plan.moves
    assert replay(plan.start, plan.moves) == goal4
    # Undoing the plan from the goal lands back on its start.
    undo = [m.reversed() for m in reversed(plan.moves)]
    assert replay(goal4, undo) == plan.start
    _assert_solves(plan.start, plan.moves)


@pytest.mark.parametrize(
    "size, depth, seed",
    [
        (3, 12, 0),
        (3, 20, 1),
        (3, 30, 2),
        (4, 15, 3),
        (4, 15, 4),
        (5, 12, 5),
        (6, 10, 6),
    ],
)
def test_shuffled_boards_round_trip(size: int, depth: int, seed: int) -> None:
    goal = Board.goal(size)
    board = GameGenerator.shuffle(goal, depth, random.Random(seed))
    moves = BidirectionalSearch(board, goal).solve(max_depth=depth + 5)
    assert len(moves) <= depth
    assert replay(board, moves) == goal
    _assert_solves(board, moves)


def test_unsolvable_board_exhausts(goal3: Board) -> None:
    board = Board.from_flat(3, [2, 1, 3, 4, 5, 6, 7, 8, 0])
    with pytest.raises(SearchExhausted):
        BidirectionalSearch(board, goal3).solve(max_depth=6)


def test_sizes_must_match(goal3: Board) -> None:
    with pytest.raises(InvalidBoard):
        BidirectionalSearch(goal3, Board.goal(4))


def test_negative_depth_is_rejected(two_moves_from_goal: Board, goal3: Board) -> None:
    with pytest.raises(ValueError):
        BidirectionalSearch(two_moves_from_goal, goal3).solve(max_depth=-1)


def test_nodes_expanded_is_reported(six_moves_from_goal: Board, goal4: Board) -> None:
    search = BidirectionalSearch(six_moves_from_goal, goal4)
    search.solve(max_depth=20)
    assert search.nodes_expanded > 0



def test_failed_reconstruction_keeps_searching(
    two_moves_from_goal: Board, goal3: Board, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[bytes] = []

    def reject_first(meeting_key, *args):
        calls.append(meeting_key)
        if len(calls) == 1:
            return None
        return reconstruct(meeting_key, *args)

    monkeypatch.setattr(search_module, "reconstruct", reject_first)
    moves = BidirectionalSearch(two_moves_from_goal, goal3).solve(max_depth=10)
    assert len(calls) >= 2
    assert is_valid_path(two_moves_from_goal, goal3, moves)


def test_reconstruction_that_never_replays_exhausts(
    two_moves_from_goal: Board, goal3: Board, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[bytes] = []

    def reject_all(meeting_key, *args):
        calls.append(meeting_key)
        return None

    monkeypatch.setattr(search_module, "reconstruct", reject_all)
    with pytest.raises(SearchExhausted):
        BidirectionalSearch(two_moves_from_goal, goal3).solve(max_depth=4)
    assert calls

# -- reconstruction -----------------------------------------------------------


def _scenario_maps(start: Board, goal: Board, backward_move: Move):
    meeting = start.apply(Move(6, 7))
    forward = {
        start.key: Predecessor(None, None),
        meeting.key: Predecessor(start.key, Move(6, 7)),
    }
    backward = {
        goal.key: Predecessor(None, None),
        meeting.key: Predecessor(goal.key, backward_move),
    }
    boards = {b.key: b for b in (start, goal, meeting)}
    return meeting.key, forward, backward, boards


def test_reconstruct_flips_backward_moves(
    two_moves_from_goal: Board, goal3: Board
) -> None:
    meeting_key, forward, backward, boards = _scenario_maps(
        two_moves_from_goal, goal3, Move(8, 7)
    )
    path = reconstruct(meeting_key, forward, backward, boards, two_moves_from_goal, goal3)
    assert path == [Move(6, 7), Move(7, 8)]


def test_reconstruct_discards_paths_that_do_not_replay(
    two_moves_from_goal: Board, goal3: Board
) -> None:
    meeting_key, forward, backward, boards = _scenario_maps(
        two_moves_from_goal, goal3, Move(8, 5)
    )
    assert (
        reconstruct(meeting_key, forward, backward, boards, two_moves_from_goal, goal3)
        is None
    )


def test_is_valid_path(two_moves_from_goal: Board, goal3: Board) -> None:
    assert is_valid_path(two_moves_from_goal, goal3, [Move(6, 7), Move(7, 8)])
    assert not is_valid_path(two_moves_from_goal, goal3, [Move(6, 7)])
    assert not is_valid_path(two_moves_from_goal, goal3, [Move(6, 2)])


# -- fallback -----------------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5, 6])
def test_fallback_plan_is_valid_for_every_size(size: int) -> None:
    goal = Board.goal(size)
    plan = fallback_solve(goal, 25, random.Random(size))
    assert len(plan.moves) == 25
    assert sorted(plan.start.tiles) == list(range(size * size))
    assert is_valid_path(plan.start, goal, plan.moves)


def test_fallback_needs_positive_depth(goal3: Board) -> None:
    with pytest.raises(ValueError):
        fallback_solve(goal3, 0)


# -- solver facade ------------------------------------------------------------


def test_solver_solve_and_hint(two_moves_from_goal: Board) -> None:
    assert Solver.solve(two_moves_from_goal) == [Move(6, 7), Move(7, 8)]
    assert Solver.hint(two_moves_from_goal) == Move(6, 7)


def test_solver_on_goal(goal3: Board) -> None:
    assert Solver.solve(goal3) == []
    assert Solver.hint(goal3) is None


def test_solver_rejects_wrong_parity() -> None:
    board = Board.from_flat(3, [2, 1, 3, 4, 5, 6, 7, 8, 0])
    assert not Solver.is_solvable(board)
    with pytest.raises(UnsolvableBoard):
        Solver.solve(board)
    assert Solver.hint(board) is None


def test_solver_hint_gives_up_quietly(six_moves_from_goal: Board) -> None:
    assert Solver.hint(six_moves_from_goal, max_depth=1) is None


@pytest.mark.parametrize(
    "size, tiles, expected",
    [
        (3, [1, 2, 3, 4, 5, 6, 8, 7, 0], False),
        (4, list(range(1, 16)) + [0], True),
        (4, [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 15, 14, 0], False),
        (4, [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 13, 14, 15, 12], True),
    ],
)
def test_is_solvable(size: int, tiles: list[int], expected: bool) -> None:
    assert Solver.is_solvable(Board.from_flat(size, tiles)) is expected


def test_hint_reaches_boards_beyond_the_solve_bound(goal3: Board) -> None:
    board = GameGenerator.shuffle(goal3, 60, random.Random(11))
    assert Solver.is_solvable(board)
    with pytest.raises(SearchExhausted):
        Solver.solve(board)  # 17 layers on 3×3

    hint = Solver.hint(board)
    assert hint is not None
    assert hint.blank == board.blank
    game = GamePlay.from_board(board)
    assert game.hint() == hint


def test_hint_depth_is_configurable(six_moves_from_goal: Board) -> None:
    assert Solver.hint(six_moves_from_goal, config=PuzzleConfig(hint_depth=1)) is None
    assert Solver.hint(six_moves_from_goal, config=PuzzleConfig(hint_depth=6)) is not None
