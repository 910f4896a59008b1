"""Legal-move generation."""

from __future__ import annotations

import pytest

from npuzzle.engine.movegen import legal_moves, neighbours
from npuzzle.models.board import Board, Move


def _blank_at(size: int, index: int) -> Board:
    tiles = list(range(1, size * size)) + [0]
    last = size * size - 1
    tiles[index], tiles[last] = tiles[last], tiles[index]
    return Board.from_flat(size, tiles)


def test_top_left_corner_on_3x3_has_two_moves() -> None:
    board = _blank_at(3, 0)
    assert legal_moves(board) == [Move(0, 3), Move(0, 1)]  # down, right


def test_centre_of_5x5_has_four_moves() -> None:
    board = _blank_at(5, 12)
    moves = legal_moves(board)
    assert len(moves) == 4
    assert {m.target for m in moves} == {7, 17, 11, 13}
    assert all(m.blank == 12 for m in moves)


def test_left_edge_does_not_wrap_to_previous_row() -> None:
    board = _blank_at(3, 3)
    assert {m.target for m in legal_moves(board)} == {0, 6, 4}


@pytest.mark.parametrize("size", [3, 4, 5, 6])
def test_move_counts_by_cell_type(size: int) -> None:
    corners = {0, size - 1, size * (size - 1), size * size - 1}
    for index in range(size * size):
        r, c = divmod(index, size)
        count = len(neighbours(size, index))
        if index in corners:
            assert count == 2
        elif r in (0, size - 1) or c in (0, size - 1):
            assert count == 3
        else:
            assert count == 4


@pytest.mark.parametrize("index", range(16))
def test_every_generated_move_applies(index: int) -> None:
    board = _blank_at(4, index)
    for move in legal_moves(board):
        moved = board.apply(move)
        assert moved.blank == move.target
        assert sorted(moved.tiles) == list(range(16))


def test_generation_is_deterministic(goal4: Board) -> None:
    assert legal_moves(goal4) == legal_moves(Board.goal(4))
