# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console messages for reconciliation runs.

Every message has a level that picks an emoji prefix and a Rich style. Colour
follows the terminal unless the caller forces it on or off.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager


class Level(str, Enum):
    """Message levels with their emoji prefix and style."""

    INFO = "info"
    OK = "ok"
    WARN = "warn"
    FAIL = "fail"
    ITEM = "item"

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]

    @property
    def style(self) -> str | None:
        return _STYLES[self]


_PREFIXES: dict[Level, str] = {
    Level.INFO: "ℹ️ ",
    Level.OK: "✅ ",
    Level.WARN: "⚠️ ",
    Level.FAIL: "❌ ",
    Level.ITEM: "",
}
_STYLES: dict[Level, str | None] = {
    Level.INFO: "cyan",
    Level.OK: "green",
    Level.WARN: "yellow",
    Level.FAIL: "bold red",
    Level.ITEM: None,
}


def emit(level: Level, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` at ``level``.

    Args:
        level: Message level.
        msg: Message text, printed literally (no Rich markup).
        use_emoji: Whether to prepend the level's emoji.
        use_color: Force colour on or off; ``None`` follows the terminal.
    """

    color = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color, emoji=use_emoji)
    text = Text(f"{level.prefix}{msg}" if use_emoji else msg)
    if color and level.style:
        text.stylize(level.style)
    console.print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a section header, as a rule on colour terminals."""

    console = get_console_manager().get(color=use_color, emoji=False)
    console.print()
    if use_color and detect_tty():
        console.print(Rule(title))
    else:
        console.print(Text(f"--- {title} ---"))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(Level.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(Level.OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(Level.WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(Level.FAIL, msg, use_emoji=use_emoji, use_color=use_color)


def listing(items: Sequence[str], *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``items`` as an indented bullet list in the given order."""

    for item in items:
        emit(Level.ITEM, f"  * {item}", use_emoji=use_emoji, use_color=use_color)


__all__ = ["Level", "emit", "fail", "info", "listing", "ok", "section", "warn"]
