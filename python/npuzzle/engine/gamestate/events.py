"""Plain observer list for game notifications."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Callable

Listener = Callable[..., None]


class GameEvent(StrEnum):
    NEW_GAME = "new_game"
    MOVED = "moved"
    SOLVED = "solved"
    HINT = "hint"
    SOLVE_REQUESTED = "solve_requested"
    FALLBACK = "fallback"
    PLAYBACK_STARTED = "playback_started"
    PLAYBACK_FINISHED = "playback_finished"


class EventBus:
    """Calls every subscriber as ``listener(event, **data)``, in order."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: GameEvent, **data: Any) -> None:
        for listener in list(self._listeners):
            listener(event, **data)
