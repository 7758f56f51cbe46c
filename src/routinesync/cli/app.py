# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .commands import register_commands

app = typer.Typer(
    name="routinesync",
    help="Keep stored routines in sync with their source files.",
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback()
def _root() -> None:
    """Keep stored routines in sync with their source files."""


register_commands(app)


def main() -> None:
    """Run the ``routinesync`` console script."""

    app()


__all__ = ["app", "main"]
