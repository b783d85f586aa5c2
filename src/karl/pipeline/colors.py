"""ANSI color rendering."""
from __future__ import annotations

from typing import Callable

from karl.pipeline.levels import Level

#: name -> (start code, stop code)
PALETTE: dict[str, tuple[int, int]] = {
    "bold": (1, 22),
    "italic": (3, 23),
    "underline": (4, 24),
    "inverse": (7, 27),
    "white": (37, 39),
    "grey": (90, 39),
    "black": (30, 39),
    "blue": (34, 39),
    "cyan": (36, 39),
    "green": (32, 39),
    "magenta": (35, 39),
    "red": (31, 39),
    "yellow": (33, 39),
}


def start_escape(color: str) -> str:
    return f"\x1b[{PALETTE[color][0]}m"


def stop_escape(color: str) -> str:
    return f"\x1b[{PALETTE[color][1]}m"


def colorize(text: str, color: str) -> str:
    """Wrap *text* in the escape pair for *color*.

    Raises:
        KeyError: *color* is not in :data:`PALETTE`.
    """
    return start_escape(color) + text + stop_escape(color)


def default_text_color(text: str) -> str:
    return text


def _painter(color: str) -> Callable[[str], str]:
    def paint(text: str) -> str:
        return colorize(text, color)

    paint.__name__ = color
    return paint


LEVEL_COLORS: dict[Level, Callable[[str], str]] = {
    Level.TRACE: _painter("green"),
    Level.DEBUG: default_text_color,
    Level.INFO: default_text_color,
    Level.WARN: _painter("yellow"),
    Level.ERROR: _painter("red"),
    Level.FATAL: _painter("red"),
}


def colorize_level(text: str, level: Level) -> str:
    """Apply the fixed per-level color to an already rendered line."""
    return LEVEL_COLORS[level](text)


__all__ = [
    "LEVEL_COLORS",
    "PALETTE",
    "colorize",
    "colorize_level",
    "default_text_color",
    "start_escape",
    "stop_escape",
]
