from npuzzle.models.board import Board, Direction, Move
from npuzzle.models.verification import Verdict, VerificationSession

__all__ = ["Board", "Direction", "Move", "Verdict", "VerificationSession"]
