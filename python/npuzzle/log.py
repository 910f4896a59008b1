"""Component-tagged logging on top of loguru.

Modules log through ``get_logger("<component>")``; only the CLI installs a
sink, via :func:`setup_logging`.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, TextIO

from loguru import logger

PALETTE = {
    "search": "cyan",
    "generator": "magenta",
    "game": "green",
    "verification": "yellow",
}

# Components that stay quiet below their own threshold.
LEVEL_PER_COMPONENT = {
    "search": "INFO",
}


def get_logger(component: str):
    """Return the shared loguru logger bound to *component*."""
    return logger.bind(component=component)


def _make_filter(base_level: str) -> Callable[[dict[str, Any]], bool]:
    base_no = logger.level(base_level).no

    def component_filter(record: dict[str, Any]) -> bool:
        comp = record["extra"].get("component", "")
        min_level = logger.level(LEVEL_PER_COMPONENT.get(comp, "DEBUG")).no
        return record["level"].no >= max(min_level, base_no)

    return component_filter


def formatter(record: dict[str, Any]) -> str:
    comp = record["extra"].get("component", "")
    colour = PALETTE.get(comp, "white")
    return (
        "{time:HH:mm:ss} | "
        f"<{colour}>{comp:<12}</> | "
        "<level>{message}</level>\n"
    )


def setup_logging(level: str = "WARNING", sink: TextIO = sys.stderr) -> int:
    """Replace loguru's default handler with the component-aware one.

    Returns the id of the installed handler.
    """
    logger.remove()
    return logger.add(
        sink,
        format=formatter,
        filter=_make_filter(level.upper()),
        colorize=True,
    )
