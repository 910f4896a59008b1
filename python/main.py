#!/usr/bin/env python3
"""Sliding Puzzle.

Usage::

    python main.py play                  # Rich terminal, 3×3
    python main.py play -f pygame -s 4   # Pygame GUI, 4×4
    python main.py play --seed 7 --shuffle-depth 20
    python main.py solve 1,2,3,4,5,6,0,7,8
"""

import importlib
import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from npuzzle.config import DEFAULT_CONFIG, MAX_SIZE, MIN_SIZE  # noqa: E402
from npuzzle.engine.gamesolver import Solver, fallback_solve  # noqa: E402
from npuzzle.errors import InvalidBoard, SearchExhausted, UnsolvableBoard  # noqa: E402
from npuzzle.log import setup_logging  # noqa: E402
from npuzzle.models.board import Board, Move  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "npuzzle_ui.cli.rich.app",
    Frontend.pygame: "npuzzle_ui.gui.pygame.app",
}


class LogLevel(StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


# -- helpers ------------------------------------------------------------------


def parse_board(text: str) -> Board:
    """Parse ``"1,2,3,..."`` (commas and/or spaces) into a square board."""
    try:
        flat = [int(tok) for tok in text.replace(",", " ").split()]
    except ValueError as exc:
        raise InvalidBoard(f"Tiles must be integers: {exc}") from None
    size = round(len(flat) ** 0.5)
    if size * size != len(flat):
        raise InvalidBoard(f"{len(flat)} tiles do not form a square board.")
    return Board.from_flat(size, flat)


def _format_moves(moves: list[Move]) -> str:
    return " ".join(f"{m.blank}->{m.target}" for m in moves)


# -- CLI ----------------------------------------------------------------------

app = typer.Typer(add_completion=False, help="Sliding-tile puzzle engine.")


@app.command()
def play(
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    size: int = typer.Option(
        3, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE,
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for reproducible shuffles.",
    ),
    shuffle_depth: Optional[int] = typer.Option(
        None, "--shuffle-depth",
        min=1,
        help="Override the shuffle depth for the chosen size.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Minimum level written to stderr.",
    ),
) -> None:
    """Play a puzzle."""
    setup_logging(log_level.value)
    config = DEFAULT_CONFIG
    if shuffle_depth is not None:
        config = config.with_shuffle_depth(size, shuffle_depth)

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(size=size, config=config, rng=random.Random(seed))


@app.command()
def solve(
    tiles: str = typer.Argument(
        ...,
        help="Row-major tiles, 0 for the blank, e.g. 1,2,3,4,5,6,0,7,8",
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth",
        min=0,
        help="Search layer bound (default: shuffle depth + margin).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for the fallback shuffle.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Minimum level written to stderr.",
    ),
) -> None:
    """Print the moves that solve a board, as blank->tile index swaps."""
    setup_logging(log_level.value)
    try:
        board = parse_board(tiles)
        moves = Solver.solve(board, max_depth=max_depth)
    except (InvalidBoard, UnsolvableBoard) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    except SearchExhausted as exc:
        depth = DEFAULT_CONFIG.solve_depth(board.size)
        plan = fallback_solve(Board.goal(board.size), depth, random.Random(seed))
        typer.echo(f"{exc} Fallback for a fresh board instead:")
        typer.echo(f"start: {','.join(map(str, plan.start.tiles))}")
        typer.echo(f"moves ({len(plan.moves)}): {_format_moves(plan.moves)}")
        return

    if not moves:
        typer.echo("Already solved.")
        return
    typer.echo(f"moves ({len(moves)}): {_format_moves(moves)}")


if __name__ == "__main__":
    app()
