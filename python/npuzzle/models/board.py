"""Board model for the sliding puzzle engine."""

from __future__ import annotations

from collections import Counter
from enum import StrEnum
from functools import lru_cache
from typing import Iterable, NamedTuple, Sequence

from npuzzle.config import MAX_SIZE, MIN_SIZE
from npuzzle.errors import IllegalMoveRequested, InvalidBoard


class Direction(StrEnum):
    """Direction the *tile* slides into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Offset from the blank to the tile that slides for each direction.
# UP   → tile below the blank moves up
# DOWN → tile above the blank moves down
# LEFT → tile right of the blank moves left
# RIGHT→ tile left of the blank moves right
_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


class Move(NamedTuple):
    """Swap of the blank at ``blank`` with the tile at ``target``."""

    blank: int
    target: int

    def reversed(self) -> Move:
        return Move(self.target, self.blank)


class Board:
    """An ``n×n`` permutation of ``0..n²-1`` stored row-major; 0 is the blank.

    Boards are values: moves return new boards and never touch the
    receiver, so the search can hold thousands of them side by side.
    """

    __slots__ = ("size", "tiles", "blank")

    def __init__(self, size: int, tiles: Sequence[int]) -> None:
        tiles = tuple(tiles)
        _validate(size, tiles)
        self._set(size, tiles, tiles.index(0))

    def _set(self, size: int, tiles: tuple[int, ...], blank: int) -> None:
        object.__setattr__(self, "size", size)
        object.__setattr__(self, "tiles", tiles)
        object.__setattr__(self, "blank", blank)

    def __setattr__(self, name, value) -> None:
        raise AttributeError(f"Board is immutable; cannot set {name!r}.")

    @classmethod
    def _trusted(cls, size: int, tiles: tuple[int, ...], blank: int) -> Board:
        """Build a board without validation (inputs derived from a valid board)."""
        obj = object.__new__(cls)
        obj._set(size, tiles, blank)
        return obj

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: Iterable[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        return cls(size, tuple(flat))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise InvalidBoard("Rows must form a square grid.")
        return cls(size, [v for row in rows for v in row])

    @classmethod
    def from_key(cls, size: int, key: bytes) -> Board:
        return cls(size, tuple(key))

    @staticmethod
    def goal(size: int) -> Board:
        """Return the solved board: ``1..n²-1`` then the blank."""
        return _goal(size)

    # -- queries --------------------------------------------------------------

    @property
    def key(self) -> bytes:
        """Packed one-byte-per-cell encoding; equal boards have equal keys."""
        return bytes(self.tiles)

    @property
    def rows(self) -> list[list[int]]:
        n = self.size
        return [list(self.tiles[r * n : (r + 1) * n]) for r in range(n)]

    @property
    def blank_pos(self) -> tuple[int, int]:
        return divmod(self.blank, self.size)

    def get_tile(self, row: int, col: int) -> int:
        return self.tiles[row * self.size + col]

    def index_of(self, row: int, col: int) -> int:
        return row * self.size + col

    def is_solved(self) -> bool:
        return self.tiles == _goal(self.size).tiles

    def is_tile_correct(self, index: int) -> bool:
        """Check if the tile at *index* sits in its goal position."""
        val = self.tiles[index]
        if val == 0:
            return index == len(self.tiles) - 1
        return index == val - 1

    def is_adjacent_to_blank(self, index: int) -> bool:
        if not 0 <= index < len(self.tiles):
            return False
        br, bc = self.blank_pos
        r, c = divmod(index, self.size)
        return abs(br - r) + abs(bc - c) == 1

    def move_for(self, direction: Direction) -> Move | None:
        """Return the move that slides a tile in *direction*, or ``None`` at the edge."""
        br, bc = self.blank_pos
        dr, dc = _DIRECTION_OFFSETS[direction]
        tr, tc = br + dr, bc + dc
        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return None
        return Move(self.blank, tr * self.size + tc)

    # -- moves ----------------------------------------------------------------

    def apply(self, move: Move) -> Board:
        """Return a new board with the blank and ``move.target`` swapped.

        Raises ``IllegalMoveRequested`` unless ``move.blank`` is the blank
        and ``move.target`` is orthogonally adjacent to it.
        """
        if move.blank != self.blank or not self.is_adjacent_to_blank(move.target):
            raise IllegalMoveRequested(
                f"Cannot apply {tuple(move)}: blank is at {self.blank}."
            )
        return self._swap(move.target)

    def _swap(self, target: int) -> Board:
        tiles = list(self.tiles)
        tiles[self.blank], tiles[target] = tiles[target], 0
        return Board._trusted(self.size, tuple(tiles), target)

    # -- dunder ---------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.tiles == other.tiles

    def __hash__(self) -> int:
        return hash((self.size, self.tiles))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, tiles={list(self.tiles)})"

    def __str__(self) -> str:
        width = len(str(self.size * self.size - 1))
        return "\n".join(
            " ".join(f"{v:>{width}}" if v else "." * width for v in row)
            for row in self.rows
        )


def _validate(size: int, tiles: tuple[int, ...]) -> None:
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise InvalidBoard(
            f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}."
        )
    if len(tiles) != size * size:
        raise InvalidBoard(
            f"Expected {size * size} tiles for a {size}×{size} board, "
            f"got {len(tiles)}."
        )
    bad = [v for v in tiles if type(v) is not int]
    if bad:
        raise InvalidBoard(f"Tiles must be integers, got {bad!r}.")
    if sorted(tiles) != list(range(size * size)):
        dupes = sorted(v for v, count in Counter(tiles).items() if count > 1)
        missing = sorted(set(range(size * size)) - set(tiles))
        raise InvalidBoard(
            f"Tiles must be a permutation of 0..{size * size - 1} "
            f"(duplicates: {dupes}, missing: {missing})."
        )


@lru_cache(maxsize=None)
def _goal(size: int) -> Board:
    n2 = size * size
    return Board(size, tuple(range(1, n2)) + (0,))
