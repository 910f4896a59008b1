"""'Are you human?' scoring that watches a game through its events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from npuzzle.engine.gamestate.events import GameEvent
from npuzzle.log import get_logger

log = get_logger("verification")

WORST_VERDICT = "You are Definitely NOT Human!"

_VERDICTS: list[tuple[int, str]] = [
    (90, "You are Definitely Human!"),
    (70, "You are Probably Human?"),
    (50, "You Might be Human?"),
    (30, "You are Probably NOT Human"),
]


def verdict_for_percent(percent: int) -> str:
    for threshold, verdict in _VERDICTS:
        if percent >= threshold:
            return verdict
    return WORST_VERDICT


@dataclass
class Verdict:
    title: str
    percent: int

    @property
    def text(self) -> str:
        return f"You are {self.percent}% human"


@dataclass
class VerificationSession:
    """Counts moves and accumulates suspicion from hints and auto-solves.

    Subscribe :meth:`on_event` to a game's event bus.  Once the puzzle is
    solved the latest verdict is available in :attr:`verdict`.
    """

    hint_penalty: float = 0.1
    solve_penalty: float = 0.5
    fail_on_solve: bool = True

    moves: int = 0
    suspicion: float = 0.0
    verdict: Verdict | None = None
    _defer_fail: bool = field(default=False, repr=False)

    def reset(self) -> None:
        self.moves = 0
        self.suspicion = 0.0
        self.verdict = None
        self._defer_fail = False

    # -- event handling -------------------------------------------------------

    def on_event(self, event: GameEvent, **data: Any) -> None:
        # Solver playback moves are not the player's.
        if event == GameEvent.MOVED and not data.get("player", True):
            return
        handler: Callable[[], None] | None = {
            GameEvent.NEW_GAME: self.reset,
            GameEvent.MOVED: self._on_move,
            GameEvent.HINT: self._on_hint,
            GameEvent.SOLVE_REQUESTED: self._on_solve_requested,
            GameEvent.SOLVED: self._on_solved,
        }.get(event)
        if handler is not None:
            handler()

    def _on_move(self) -> None:
        self.moves += 1

    def _on_hint(self) -> None:
        self._raise_suspicion(self.hint_penalty)
        if self.suspicion >= 1.0:
            self._defer_fail = True

    def _on_solve_requested(self) -> None:
        if self.fail_on_solve:
            # Failure is only reported once the playback has finished.
            self.suspicion = 1.0
            self._defer_fail = True
        else:
            self._raise_suspicion(self.solve_penalty)

    def _on_solved(self) -> None:
        percent = self.human_percent
        if self.suspicion >= 1.0 or self._defer_fail:
            title = WORST_VERDICT
        else:
            title = verdict_for_percent(percent)
        self.verdict = Verdict(title=title, percent=percent)
        self._defer_fail = False
        log.info("Verdict: {} ({}%)", title, percent)

    def _raise_suspicion(self, amount: float) -> None:
        # Rounded so ten 0.1 hints really reach 1.0.
        self.suspicion = min(1.0, max(0.0, round(self.suspicion + amount, 6)))

    # -- queries --------------------------------------------------------------

    @property
    def human_percent(self) -> int:
        return max(0, min(100, round((1.0 - self.suspicion) * 100)))

    @property
    def label(self) -> str:
        if self.suspicion <= 0.0:
            return "Suspicion: None"
        if self.suspicion < 0.5:
            return "Suspicion: Low"
        if self.suspicion < 1.0:
            return "Suspicion: High"
        return "Suspicious!"
