"""Single-keypress reader for the terminal frontend.

Arrow keys and WASD move tiles; letters trigger game actions.  Works on
macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "n": "new",
    "h": "hint",
    "?": "hint",
    "v": "solve",
    "x": "stop",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string (case-insensitive)."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action:
        return action
    return ch if ch.isprintable() else ""


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


def _read_unix(fd: int, timeout: float | None) -> str | None:
    import select

    if timeout is not None:
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
    return os.read(fd, 1).decode("utf-8", errors="ignore")


def _key_unix(timeout: float | None) -> str | None:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = _read_unix(fd, timeout)
        if ch is None:
            return None
        # Arrow keys: ESC [ A/B/C/D
        if ch == "\x1b":
            if _read_unix(fd, 0.1) != "[":
                return "quit"  # bare Escape
            return _ARROW_MAP.get(_read_unix(fd, 0.1) or "", "")
        return resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _key_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    ch = _getch_windows()
    if ch in ("\x00", "\xe0"):
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
            _getch_windows(), ""
        )
    return resolve(ch)


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Possible return values:
        "up", "down", "left", "right" : movement
        "quit"                        : q / Ctrl-C / Escape
        "new"                         : n (new puzzle)
        "hint"                        : h / ?
        "solve"                       : v (auto-solve)
        "stop"                        : x (stop a running auto-solve)
        "enter"                       : Enter / Return
        "<char>"                      : unmapped printable char
        ""                            : unrecognised key
    """
    key = get_key_timeout(None)
    return key or ""


def get_key_timeout(timeout: float | None) -> str | None:
    """Like :func:`get_key` but returns ``None`` after *timeout* seconds."""
    if os.name == "nt":
        return _key_windows(timeout)
    return _key_unix(timeout)
