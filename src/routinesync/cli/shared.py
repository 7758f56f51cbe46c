# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Logger and error types shared by CLI commands."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

import typer
from rich.console import Console
from rich.text import Text

from ..logging import Level, emit

_DEBUG_KEY: Final[re.Pattern[str]] = re.compile(r"[\w-]+(?==)")
_DEBUG_VALUE: Final[re.Pattern[str]] = re.compile(r"(?<==)(?:\"[^\"]*\"|'[^']*'|\S+)")


class CLIError(RuntimeError):
    """Failure that ends a command with ``exit_code``."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Run logger writing to the terminal with the command's emoji and colour flags.

    Attributes:
        console: Console used for debug output.
        use_emoji: Prefix messages with the level emoji.
        debug_enabled: Print :meth:`debug` messages.
        use_color: Force colour on or off; ``None`` follows the terminal.
    """

    console: Console = field(default_factory=lambda: Console(highlight=False))
    use_emoji: bool = True
    debug_enabled: bool = False
    use_color: bool | None = None

    def _emit(self, level: Level, message: str) -> None:
        emit(level, message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        self._emit(Level.INFO, message)

    def ok(self, message: str) -> None:
        self._emit(Level.OK, message)

    def warn(self, message: str) -> None:
        self._emit(Level.WARN, message)

    def fail(self, message: str) -> None:
        self._emit(Level.FAIL, message)

    def listing(self, items: Sequence[str]) -> None:
        for item in items:
            self._emit(Level.ITEM, f"  * {item}")

    def echo(self, message: str) -> None:
        typer.echo(message)

    def debug(self, message: str) -> None:
        """Print ``message`` with ``key=value`` pairs highlighted when debugging."""

        if not self.debug_enabled:
            return
        body = Text(message, style="dim")
        body.highlight_regex(_DEBUG_KEY, "bold magenta")
        body.highlight_regex(_DEBUG_VALUE, "bold green")
        self.console.print(Text.assemble(("[debug] ", "bold cyan"), body))


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a :class:`CLILogger` for the command line flags.

    Args:
        emoji: Whether messages may carry emoji.
        debug: Whether debug messages are printed.
        no_color: Whether colour is disabled regardless of the terminal.

    Returns:
        CLILogger: Logger bound to a fresh console.
    """

    return CLILogger(
        console=Console(no_color=no_color, highlight=False),
        use_emoji=emoji,
        debug_enabled=debug,
        use_color=False if no_color else None,
    )


__all__ = ["CLIError", "CLILogger", "build_cli_logger"]
