# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load CLI command package."""

from __future__ import annotations

import typer

from .command import load_command

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the load command on the provided Typer application.

    Args:
        app: Typer application receiving the command.
    """

    app.command("load", help="Load routine sources into the database.")(load_command)
