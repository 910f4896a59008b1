"""Tuning knobs: supported sizes, shuffle depths, solver margin."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

MIN_SIZE = 3
MAX_SIZE = 6

# Kept small so the bounded solver can always catch up with a fresh puzzle.
DEFAULT_SHUFFLE_DEPTHS: Mapping[int, int] = MappingProxyType(
    {3: 12, 4: 15, 5: 20, 6: 26}
)
DEFAULT_SHUFFLE_DEPTH = 15
DEFAULT_SOLVE_MARGIN = 5
# Layer bound for hints; independent of the shuffle depth.
DEFAULT_HINT_DEPTH = 30


def validate_size(size: int) -> int:
    """Return *size* unchanged, or raise ``ValueError`` if unsupported."""
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise ValueError(
            f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}."
        )
    return size


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"

    @property
    def size(self) -> int:
        return _DIFFICULTY_SIZES[self]

    @property
    def label(self) -> str:
        n = self.size
        return f"{self.value.capitalize()} ({n}×{n})"

    @classmethod
    def for_size(cls, size: int) -> Difficulty:
        validate_size(size)
        for difficulty, n in _DIFFICULTY_SIZES.items():
            if n == size:
                return difficulty
        raise ValueError(f"No difficulty for size {size}.")


_DIFFICULTY_SIZES: dict[Difficulty, int] = {
    Difficulty.EASY: 3,
    Difficulty.MEDIUM: 4,
    Difficulty.HARD: 5,
    Difficulty.EXTREME: 6,
}


@dataclass(frozen=True)
class PuzzleConfig:
    """Per-size shuffle depths and the margin the solver gets on top.

    The solver's layer bound for a size is its shuffle depth plus
    ``solve_margin``, so any freshly generated puzzle is in reach.
    Hints search up to ``hint_depth`` layers whatever the size.
    """

    shuffle_depths: Mapping[int, int] = field(
        default_factory=lambda: dict(DEFAULT_SHUFFLE_DEPTHS)
    )
    solve_margin: int = DEFAULT_SOLVE_MARGIN
    default_depth: int = DEFAULT_SHUFFLE_DEPTH
    hint_depth: int = DEFAULT_HINT_DEPTH

    def __post_init__(self) -> None:
        if self.solve_margin < 0:
            raise ValueError("solve_margin must not be negative.")
        if self.hint_depth < 0:
            raise ValueError("hint_depth must not be negative.")
        for size, depth in self.shuffle_depths.items():
            if depth < 0:
                raise ValueError(f"Shuffle depth for {size}x{size} is negative.")

    def shuffle_depth(self, size: int) -> int:
        return self.shuffle_depths.get(size, self.default_depth)

    def solve_depth(self, size: int) -> int:
        return self.shuffle_depth(size) + self.solve_margin

    def with_shuffle_depth(self, size: int, depth: int) -> PuzzleConfig:
        """Return a copy with the depth for *size* overridden."""
        depths = dict(self.shuffle_depths)
        depths[validate_size(size)] = depth
        return replace(self, shuffle_depths=depths)


DEFAULT_CONFIG = PuzzleConfig()
