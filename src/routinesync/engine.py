# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconcile routine sources with the live catalog and the metadata snapshot.

A run walks through the following phases, each handing explicit values to the
next one:

1. enumerate source units (directory tree or explicit list);
2. reject units whose routine names or accessor names collide;
3. build the placeholder substitution table;
4. load the previous metadata snapshot;
5. snapshot the live routine catalog;
6. normalise the execution mode;
7. load every accepted unit in routine-name order;
8. (full runs only) drop obsolete routines and prune stale metadata;
9. persist the new snapshot;
10. report the units that were not loaded.

Fatal errors (configuration, corrupt metadata, failed persistence) propagate
to the caller untouched. Unit failures, conflicts and missing files are
recorded in the run's :class:`~routinesync.models.ErrorSet` and never stop
the loop.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .conflicts import ConflictReport, detect_conflicts
from .differ import find_obsolete
from .discovery import CatalogResult, DirectoryCatalog, ExplicitCatalog
from .errors import UnitLoadFailure
from .interfaces import (
    ColumnTypeSource,
    ConstantsSource,
    DataLayer,
    ModeNormalizer,
    NamingStrategy,
    RoutineCatalogReader,
    RoutineDropper,
    RunLogger,
    UnitLoader,
)
from .metadata_store import MetadataStore
from .models import (
    ErrorKind,
    ErrorSet,
    LiveRoutineRecord,
    MetadataRecord,
    MetadataSnapshot,
    RunMode,
    RunResult,
    SourceUnit,
    SubstitutionTable,
    UnitState,
)
from .naming import NullNamingStrategy
from .substitutions import build_substitution_table


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Static inputs shared by every unit load of a run."""

    extension: str
    mode: str
    character_set: str
    collation: str


@dataclass(frozen=True, slots=True)
class Collaborators:
    """External services the engine delegates to."""

    column_types: ColumnTypeSource
    routine_catalog: RoutineCatalogReader
    dropper: RoutineDropper
    mode_normalizer: ModeNormalizer
    loader: UnitLoader
    constants: ConstantsSource | None = None
    naming: NamingStrategy = field(default_factory=NullNamingStrategy)

    @classmethod
    def from_data_layer(
        cls,
        data_layer: DataLayer,
        loader: UnitLoader,
        *,
        constants: ConstantsSource | None = None,
        naming: NamingStrategy | None = None,
    ) -> Collaborators:
        """Build collaborators backed by a single data layer object.

        Args:
            data_layer: Object implementing every database operation.
            loader: Unit loader compiling sources into routines.
            constants: Optional constants source.
            naming: Optional naming strategy.

        Returns:
            Collaborators: Bundle wiring ``data_layer`` into every database slot.
        """

        return cls(
            column_types=data_layer,
            routine_catalog=data_layer,
            dropper=data_layer,
            mode_normalizer=data_layer,
            loader=loader,
            constants=constants,
            naming=naming or NullNamingStrategy(),
        )


@dataclass(slots=True)
class _LoadOutcome:
    metadata: MetadataSnapshot
    errors: ErrorSet
    states: dict[str, UnitState]


class ReconciliationEngine:
    """Drive one reconciliation run against the configured collaborators."""

    def __init__(
        self,
        *,
        settings: EngineSettings,
        collaborators: Collaborators,
        store: MetadataStore,
        logger: RunLogger,
    ) -> None:
        """Create an engine.

        Args:
            settings: Extension, mode, character set and collation of the run.
            collaborators: Database, loader, constants and naming services.
            store: Metadata store read at the start and written at the end.
            logger: Logger receiving progress and error reports.
        """

        self.settings = settings
        self.collaborators = collaborators
        self.store = store
        self.logger = logger

    def run_full(self, source_directory: Path) -> RunResult:
        """Reconcile every source below ``source_directory``.

        Args:
            source_directory: Root of the routine source tree.

        Returns:
            RunResult: Outcome of the run, including drops and pruning.

        Raises:
            ConfigurationError: If ``source_directory`` is not an existing
                directory. Nothing is queried, dropped or saved in that case.
        """

        catalog = DirectoryCatalog(self.settings.extension, naming=self.collaborators.naming)
        return self._run(RunMode.FULL, catalog.enumerate(source_directory))

    def run_list(self, paths: Sequence[str]) -> RunResult:
        """Reconcile only the sources named in ``paths``.

        List-scoped runs never drop routines and never prune metadata of
        routines outside the list.

        Args:
            paths: Source file paths supplied by the user.

        Returns:
            RunResult: Outcome of the run.
        """

        catalog = ExplicitCatalog(
            self.settings.extension,
            naming=self.collaborators.naming,
            logger=self.logger,
        )
        return self._run(RunMode.LIST, catalog.enumerate(paths))

    def _run(self, mode: RunMode, catalog: CatalogResult) -> RunResult:
        errors = ErrorSet()
        errors.extend(catalog.errors)

        report = detect_conflicts(catalog.units)
        self._report_conflicts(report)
        errors.extend(report.errors)

        substitutions, _ = build_substitution_table(
            self.collaborators.column_types,
            self.collaborators.constants,
            logger=self.logger,
        )
        prior_metadata = self.store.load()
        live = self._live_catalog()
        normalized_mode = self.collaborators.mode_normalizer.normalize_mode(self.settings.mode)

        outcome = self._load_units(report.accepted, substitutions, prior_metadata, live, normalized_mode)
        errors.extend(outcome.errors)

        result = RunResult(
            mode=mode,
            accepted_units=report.accepted,
            rejected_paths=tuple(unit.path for unit in report.rejected),
            metadata=outcome.metadata,
            errors=errors,
            states=outcome.states,
        )
        if mode is RunMode.FULL:
            self._drop_obsolete(result, live)
            result.metadata = prune_metadata(result.metadata, result.accepted_units)

        self.store.save(result.metadata)
        self._report_errors(result.errors)
        return result

    def _live_catalog(self) -> dict[str, LiveRoutineRecord]:
        return {record.routine_name: record for record in self.collaborators.routine_catalog.list_routines()}

    def _load_units(
        self,
        units: Sequence[SourceUnit],
        substitutions: SubstitutionTable,
        prior_metadata: Mapping[str, MetadataRecord],
        live: Mapping[str, LiveRoutineRecord],
        mode: str,
    ) -> _LoadOutcome:
        """Load ``units`` one at a time in routine-name order.

        Args:
            units: Accepted units.
            substitutions: Placeholder table handed to the loader.
            prior_metadata: Snapshot loaded at the start of the run.
            live: Live catalog keyed by routine name.
            mode: Normalised execution mode.

        Returns:
            _LoadOutcome: Updated snapshot, unit failures and final states.
        """

        snapshot: MetadataSnapshot = dict(prior_metadata)
        errors = ErrorSet()
        states = {unit.routine_name: UnitState.PENDING for unit in units}

        for unit in sorted(units, key=lambda item: item.routine_name):
            name = unit.routine_name
            states[name] = UnitState.LOADING
            message = ""
            try:
                record = self.collaborators.loader.load(
                    unit,
                    substitutions,
                    snapshot.get(name),
                    live.get(name),
                    mode,
                    self.settings.character_set,
                    self.settings.collation,
                )
            except UnitLoadFailure as exc:
                record = None
                message = str(exc)

            if record is None:
                states[name] = UnitState.FAILED
                errors.add(unit.path, ErrorKind.UNIT_LOAD_FAILURE, message)
                snapshot.pop(name, None)
            else:
                states[name] = UnitState.LOADED
                snapshot[name] = record

        return _LoadOutcome(metadata=snapshot, errors=errors, states=states)

    def _drop_obsolete(self, result: RunResult, live: Mapping[str, LiveRoutineRecord]) -> None:
        for record in find_obsolete(live, result.accepted_units):
            self.logger.info(f"Dropping {record.routine_type.lower()} {record.routine_name}")
            if self.collaborators.dropper.drop_routine(record.routine_type, record.routine_name):
                result.dropped.append(record)
            else:
                self.logger.warn(f"Unable to drop {record.routine_type.lower()} {record.routine_name}")
                result.failed_drops.append(record)

    def _report_conflicts(self, report: ConflictReport) -> None:
        for routine_name, units in report.duplicates.items():
            self.logger.fail(f"The following source files define the same routine '{routine_name}'")
            self.logger.listing([unit.path for unit in units])
        for accessor_name, units in report.conflicts.items():
            self.logger.fail(
                f"The following source files would result in wrapper methods with equal name '{accessor_name}'",
            )
            self.logger.listing([unit.path for unit in units])

    def _report_errors(self, errors: ErrorSet) -> None:
        if not errors:
            return
        self.logger.warn("Routines in the files below are not loaded:")
        self.logger.listing(errors.paths)


def prune_metadata(metadata: Mapping[str, MetadataRecord], units: Sequence[SourceUnit]) -> MetadataSnapshot:
    """Keep only the metadata entries of ``units``.

    Args:
        metadata: Snapshot to prune.
        units: Units that still have a source file.

    Returns:
        MetadataSnapshot: New snapshot without entries for vanished sources.
    """

    names = {unit.routine_name for unit in units}
    return {name: record for name, record in metadata.items() if name in names}


__all__ = [
    "Collaborators",
    "EngineSettings",
    "ReconciliationEngine",
    "prune_metadata",
]
