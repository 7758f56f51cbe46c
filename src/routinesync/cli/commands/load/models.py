# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the load CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

CONFIG_ARGUMENT = Annotated[
    Path,
    typer.Argument(
        help="TOML configuration file.",
        dir_okay=False,
        show_default=False,
    ),
]
SOURCES_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(
        help="Source files to load. Without sources every routine below the source directory is reconciled.",
        show_default=False,
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle ANSI colour output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Emit debug messages."),
]


@dataclass(slots=True)
class LoadOptions:
    """Normalised CLI inputs for the load workflow."""

    config: Path
    sources: tuple[str, ...]
    use_emoji: bool
    use_color: bool
    debug: bool

    @property
    def full_run(self) -> bool:
        """Return whether the whole source tree must be reconciled."""

        return not self.sources


def build_load_options(
    config: Path,
    sources: list[str] | None,
    *,
    emoji: bool,
    color: bool,
    debug: bool,
) -> LoadOptions:
    """Construct ``LoadOptions`` from Typer parameters.

    Args:
        config: Configuration file supplied on the command line.
        sources: Optional source files restricting the run.
        emoji: Flag controlling emoji usage in CLI output.
        color: Flag controlling colour usage in CLI output.
        debug: Flag enabling debug messages.

    Returns:
        LoadOptions: Structured CLI options for the load command.
    """

    return LoadOptions(
        config=config,
        sources=tuple(sources or ()),
        use_emoji=emoji,
        use_color=color,
        debug=debug,
    )


__all__ = [
    "COLOR_OPTION",
    "CONFIG_ARGUMENT",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "LoadOptions",
    "SOURCES_ARGUMENT",
    "build_load_options",
]
