# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command loading routine sources into the database."""

from __future__ import annotations

import psycopg
import typer

from ....config import load_settings
from ....database import connect
from ....discovery import require_directory
from ....errors import ConfigurationError, RoutineSyncError
from ....logging import section
from ...shared import CLIError, CLILogger, build_cli_logger
from .models import (
    COLOR_OPTION,
    CONFIG_ARGUMENT,
    DEBUG_OPTION,
    EMOJI_OPTION,
    SOURCES_ARGUMENT,
    LoadOptions,
    build_load_options,
)
from .services import build_engine, emit_summary, resolve_plugins, run_engine

CONFIG_EXIT_CODE = 2
FATAL_EXIT_CODE = 1


def load_command(
    config: CONFIG_ARGUMENT,
    sources: SOURCES_ARGUMENT = None,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Load routine sources and drop routines whose source vanished.

    Args:
        config: TOML configuration file.
        sources: Optional source files restricting the run.
        emoji: Flag controlling emoji usage in CLI output.
        color: Flag controlling colour usage in CLI output.
        debug: Flag enabling debug messages.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    options = build_load_options(config, sources, emoji=emoji, color=color, debug=debug)
    logger = build_cli_logger(emoji=options.use_emoji, debug=options.debug, no_color=not options.use_color)
    section("Loader", use_color=options.use_color)
    try:
        exit_code = execute_load(options, logger=logger)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=exit_code)


def execute_load(options: LoadOptions, *, logger: CLILogger) -> int:
    """Run the load workflow described by ``options``.

    Args:
        options: Normalised CLI options.
        logger: Logger receiving progress and error messages.

    Returns:
        int: ``0`` when every unit loaded, ``1`` otherwise.

    Raises:
        CLIError: If configuration is invalid or a fatal error stops the run.
    """

    try:
        settings = load_settings(options.config)
        plugins = resolve_plugins(settings)
        if options.full_run:
            require_directory(settings.loader.source_directory)
    except ConfigurationError as exc:
        raise CLIError(str(exc), exit_code=CONFIG_EXIT_CODE) from exc
    logger.debug(f"config={settings.source} metadata={settings.loader.metadata} mode={settings.loader.mode!r}")

    try:
        conn = connect(settings.database)
    except psycopg.Error as exc:
        raise CLIError(f"Unable to connect to database '{settings.database.name}': {exc}") from exc

    try:
        engine = build_engine(settings, conn, plugins, logger=logger)
        result = run_engine(engine, settings.loader.source_directory, options.sources)
    except ConfigurationError as exc:
        raise CLIError(str(exc), exit_code=CONFIG_EXIT_CODE) from exc
    except (RoutineSyncError, psycopg.Error) as exc:
        raise CLIError(str(exc), exit_code=FATAL_EXIT_CODE) from exc
    finally:
        conn.close()

    emit_summary(result, logger=logger)
    return result.exit_code


__all__ = ["execute_load", "load_command"]
