from npuzzle.engine.gamesolver.fallback import FallbackPlan, fallback_solve
from npuzzle.engine.gamesolver.reconstruct import (
    Predecessor,
    is_valid_path,
    reconstruct,
    replay,
)
from npuzzle.engine.gamesolver.search import BidirectionalSearch
from npuzzle.engine.gamesolver.solver import Solver

__all__ = [
    "BidirectionalSearch",
    "FallbackPlan",
    "Predecessor",
    "Solver",
    "fallback_solve",
    "is_valid_path",
    "reconstruct",
    "replay",
]
