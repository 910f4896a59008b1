"""Legal-move generation."""

from __future__ import annotations

from functools import lru_cache

from npuzzle.models.board import Board, Move


@lru_cache(maxsize=None)
def neighbours(size: int, index: int) -> tuple[int, ...]:
    """Cells orthogonally adjacent to *index* on an ``size×size`` grid.

    Ordered up, down, left, right; rows never wrap.
    """
    r, c = divmod(index, size)
    nb: list[int] = []
    if r > 0:
        nb.append(index - size)
    if r < size - 1:
        nb.append(index + size)
    if c > 0:
        nb.append(index - 1)
    if c < size - 1:
        nb.append(index + 1)
    return tuple(nb)


def legal_moves(board: Board) -> list[Move]:
    """Return every move that swaps the blank with a neighbouring tile (2–4)."""
    blank = board.blank
    return [Move(blank, target) for target in neighbours(board.size, blank)]
