"""Rich terminal frontend built from tables and panels.

Uses the ``rich`` library for styled output.  The menu picks a size
(3×3 to 6×6); a game offers hints and an animated auto-solve, and the
verification HUD tracks how human the player looks.
"""

from __future__ import annotations

import random

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from npuzzle.config import MAX_SIZE, MIN_SIZE, Difficulty, PuzzleConfig
from npuzzle.engine.gameplay import GamePlay, Playback
from npuzzle.engine.gamestate import GameEvent
from npuzzle.models.board import Board, Direction
from npuzzle.models.verification import VerificationSession
from npuzzle_ui.cli.input_handler import get_key, get_key_timeout

console = Console()

PLAYBACK_DELAY = 0.2

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def render_board(board: Board, highlight: int | None = None) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.rows):
        cells: list[str] = []
        for c, val in enumerate(row):
            index = board.index_of(r, c)
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif index == highlight:
                cells.append(f"[bold black on yellow]{val:>{width}}[/bold black on yellow]")
            elif board.is_tile_correct(index):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _stats(game: GamePlay, session: VerificationSession) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    stats.append("    ")
    style = "bold red" if session.suspicion >= 0.5 else "bold green"
    stats.append(session.label, style=style)
    return stats


# -- screens ------------------------------------------------------------------


def _draw_menu(sel_size: int) -> None:
    console.clear()

    sizes = Text()
    for s in range(MIN_SIZE, MAX_SIZE + 1):
        if s > MIN_SIZE:
            sizes.append("  ")
        style = "bold green on #313244" if s == sel_size else "dim"
        sizes.append(f" {s}×{s} ", style=style)

    label = Text(Difficulty.for_size(sel_size).label, style="bold cyan")
    nav = Text("  ← →  change size", style="dim")

    opts = Text()
    opts.append("  Enter", style="bold cyan")
    opts.append("  Play    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(label),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )
    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_game(
    game: GamePlay,
    session: VerificationSession,
    status: str = "",
    highlight: int | None = None,
    title: str | None = None,
) -> None:
    console.clear()
    size = game.size

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  new   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    panel = Panel(
        Align.center(render_board(game.board, highlight)),
        title=title or f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(game, session)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay, session: VerificationSession) -> None:
    console.clear()
    size = game.size

    verdict = session.verdict
    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append(verdict.title if verdict else "Solved!", style="bold green")
    congrats.append(" ★\n", style="bold yellow")
    if verdict:
        congrats.append(f"  {verdict.text}\n", style="green")

    group = Group(
        Align.center(render_board(game.board)),
        Align.center(congrats),
        Align.center(_stats(game, session)),
    )
    panel = Panel(
        group,
        title=f"[bold green]Sliding Puzzle  {size}×{size}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press N to play again, Q to go back.\n", style="dim"))
    )


# -- solver helpers -----------------------------------------------------------


def _play_back(game: GamePlay, session: VerificationSession, playback: Playback) -> str:
    """Animate *playback*; X stops it between two moves."""
    total = len(playback.moves)
    for _ in playback:
        title = (
            f"[bold cyan]Auto-Solve  move {playback.applied}/{total}[/bold cyan]"
        )
        _draw_game(game, session, "[dim]X to stop[/dim]", title=title)
        if get_key_timeout(PLAYBACK_DELAY) == "stop":
            playback.cancel()
            return f"[yellow]Stopped after {playback.applied} moves.[/yellow]"
    return f"[bold green]Solved in {total} moves![/bold green]"


# -- game loop ----------------------------------------------------------------


def _play_game(size: int, config: PuzzleConfig, rng: random.Random) -> None:
    session = VerificationSession()
    game = GamePlay(size, config=config, rng=rng)
    game.bus.subscribe(session.on_event)

    fallback_used: list[bool] = []

    def on_fallback(event: GameEvent, **_) -> None:
        if event == GameEvent.FALLBACK:
            fallback_used.append(True)

    game.bus.subscribe(on_fallback)

    status = ""
    highlight: int | None = None
    while True:
        if game.is_won:
            _draw_win(game, session)
            key = get_key()
            if key == "new":
                game.new_game()
                status = ""
            elif key == "quit":
                return
            continue

        _draw_game(game, session, status, highlight)
        status = ""
        highlight = None

        key = get_key_timeout(0.5)
        if key is None:
            continue
        if key in _DIRECTIONS:
            game.move(_DIRECTIONS[key])
        elif key == "hint":
            move = game.hint()
            if move is None:
                status = "[yellow]No hint available.[/yellow]"
            else:
                highlight = move.target
                status = "[cyan]Hint:[/cyan] slide the highlighted tile"
        elif key == "solve":
            fallback_used.clear()
            playback = game.solve()
            if playback is not None:
                status = _play_back(game, session, playback)
                if fallback_used:
                    status += " [dim](reshuffled: search gave up)[/dim]"
        elif key == "new":
            game.new_game()
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(size: int, config: PuzzleConfig, rng: random.Random) -> None:
    sel_size = size
    while True:
        _draw_menu(sel_size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "left":
            sel_size = max(MIN_SIZE, sel_size - 1)
        elif key == "right":
            sel_size = min(MAX_SIZE, sel_size + 1)
        elif key in ("enter", "1"):
            _play_game(sel_size, config, rng)


# -- public entry point -------------------------------------------------------


def run(size: int, config: PuzzleConfig, rng: random.Random) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(size, config, rng)
