# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for run output."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache

from rich.console import Console


def detect_tty() -> bool:
    """Return whether stdout is attached to a terminal."""

    isatty = getattr(sys.stdout, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        return False


@dataclass(frozen=True, slots=True)
class ConsoleStyle:
    """Presentation flags a console is built for."""

    color: bool
    emoji: bool
    tty: bool

    @property
    def ansi(self) -> bool:
        return self.color and self.tty


class RichConsoleManager:
    """Hand out one :class:`Console` per :class:`ConsoleStyle`.

    Consoles are created without an explicit file so they always write to the
    current ``sys.stdout``; call :meth:`clear` after the terminal changes.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleStyle, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        style = ConsoleStyle(color=color, emoji=emoji, tty=detect_tty())
        console = self._consoles.get(style)
        if console is None:
            console = Console(
                color_system="auto" if style.ansi else None,
                force_terminal=style.tty,
                no_color=not style.ansi,
                emoji=style.emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[style] = console
        return console

    def clear(self) -> None:
        self._consoles.clear()


@cache
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


__all__ = ["ConsoleStyle", "RichConsoleManager", "detect_tty", "get_console_manager"]
