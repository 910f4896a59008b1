"""Shared fixtures for the puzzle engine tests."""

from __future__ import annotations

import random

import pytest
from loguru import logger

from npuzzle.models.board import Board, Move

# Six blank moves away from the 4×4 goal; Manhattan distance is also 6.
SIX_MOVE_PATH = [
    Move(15, 11),
    Move(11, 7),
    Move(7, 6),
    Move(6, 10),
    Move(10, 9),
    Move(9, 5),
]


@pytest.fixture(autouse=True)
def _drop_log_sinks():
    """Tests that install sinks must not leak them into later tests."""
    yield
    logger.remove()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def goal3() -> Board:
    return Board.goal(3)


@pytest.fixture
def goal4() -> Board:
    return Board.goal(4)


@pytest.fixture
def two_moves_from_goal() -> Board:
    """Blank at index 6; solved by swap(6,7) then swap(7,8)."""
    return Board.from_flat(3, [1, 2, 3, 4, 5, 6, 0, 7, 8])


@pytest.fixture
def six_moves_from_goal(goal4: Board) -> Board:
    board = goal4
    for move in SIX_MOVE_PATH:
        board = board.apply(move)
    return board
