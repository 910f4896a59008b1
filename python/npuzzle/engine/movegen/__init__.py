from npuzzle.engine.movegen.moves import legal_moves, neighbours

__all__ = ["legal_moves", "neighbours"]
