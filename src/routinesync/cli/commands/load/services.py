# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helper services for the load CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import psycopg

from ....config import Settings
from ....constants import ModuleConstantsSource
from ....database import PostgresDataLayer, SourceRoutineLoader
from ....engine import Collaborators, EngineSettings, ReconciliationEngine
from ....interfaces import ConstantsSource, NamingStrategy, RunLogger
from ....metadata_store import MetadataStore
from ....models import RunResult, UnitState
from ....naming import resolve_naming_strategy


@dataclass(frozen=True, slots=True)
class Plugins:
    """Constants source and naming strategy resolved from the configuration."""

    constants: ConstantsSource | None
    naming: NamingStrategy


def resolve_plugins(settings: Settings) -> Plugins:
    """Import the configured constants module and naming strategy.

    Args:
        settings: Validated configuration.

    Returns:
        Plugins: Ready-to-use collaborators.

    Raises:
        ConfigurationError: If a configured reference cannot be imported.
    """

    constants: ModuleConstantsSource | None = None
    if settings.constants.module:
        constants = ModuleConstantsSource(settings.constants.module)
        constants.resolve()
    return Plugins(constants=constants, naming=resolve_naming_strategy(settings.wrapper.naming_strategy))


def build_engine(
    settings: Settings,
    conn: psycopg.Connection,
    plugins: Plugins,
    *,
    logger: RunLogger,
) -> ReconciliationEngine:
    """Wire the PostgreSQL collaborators into a reconciliation engine.

    Args:
        settings: Validated configuration.
        conn: Open database connection shared by every collaborator.
        plugins: Resolved constants source and naming strategy.
        logger: Logger receiving progress and error messages.

    Returns:
        ReconciliationEngine: Engine ready to run.
    """

    collaborators = Collaborators.from_data_layer(
        PostgresDataLayer(conn, logger=logger),
        SourceRoutineLoader(conn, logger),
        constants=plugins.constants,
        naming=plugins.naming,
    )
    loader = settings.loader
    return ReconciliationEngine(
        settings=EngineSettings(
            extension=loader.extension,
            mode=loader.mode,
            character_set=loader.character_set,
            collation=loader.collation,
        ),
        collaborators=collaborators,
        store=MetadataStore(loader.metadata),
        logger=logger,
    )


def run_engine(engine: ReconciliationEngine, source_directory: Path, sources: tuple[str, ...]) -> RunResult:
    """Run a full reconciliation, or a list-scoped one when ``sources`` is given."""

    if sources:
        return engine.run_list(sources)
    return engine.run_full(source_directory)


def emit_summary(result: RunResult, *, logger: RunLogger) -> None:
    """Log a one-line summary of ``result``.

    Args:
        result: Outcome of the reconciliation run.
        logger: Logger used to emit the summary.
    """

    loaded = sum(1 for state in result.states.values() if state is UnitState.LOADED)
    message = f"{loaded} routine(s) up to date, {len(result.dropped)} dropped"
    if result.failed_drops:
        message = f"{message}, {len(result.failed_drops)} could not be dropped"
    if result.errors:
        logger.warn(f"{message}, {len(result.errors)} not loaded")
    else:
        logger.ok(message)


__all__ = ["Plugins", "build_engine", "emit_summary", "resolve_plugins", "run_engine"]
