"""Sliding-tile puzzle engine: board model, shuffling and a bidirectional solver."""

__version__ = "0.1.0"
