# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile routine sources into PostgreSQL functions and procedures."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final, LiteralString, cast

import psycopg

from ..interfaces.console import RunLogger
from ..models import JsonValue, LiveRoutineRecord, MetadataRecord, SourceUnit, SubstitutionTable
from .datalayer import drop_overloads
from .source import (
    RoutineSource,
    SourceError,
    find_designation,
    parse_header,
    resolve_placeholders,
    substitute,
)

_PARAMETERS_SQL: Final = """
    SELECT p.parameter_name, p.data_type, p.parameter_mode
    FROM information_schema.parameters p
    JOIN information_schema.routines r
      ON r.specific_schema = p.specific_schema
     AND r.specific_name = p.specific_name
    WHERE r.routine_schema = current_schema()
      AND r.routine_name = %s
    ORDER BY r.specific_name, p.ordinal_position
"""
_SET_CONFIG_SQL: Final = "SELECT set_config(%s, %s, true)"

_FINGERPRINT_KEYS: Final[tuple[str, ...]] = ("timestamp", "replace", "mode", "character_set", "collation")


@dataclass(frozen=True, slots=True)
class LoadContext:
    """Inputs that decide whether a routine must be reloaded."""

    timestamp: int
    replace: dict[str, str]
    mode: str
    character_set: str
    collation: str

    def fingerprint(self) -> dict[str, JsonValue]:
        return {
            "timestamp": self.timestamp,
            "replace": dict(self.replace),
            "mode": self.mode,
            "character_set": self.character_set,
            "collation": self.collation,
        }

    def matches(self, record: Mapping[str, JsonValue]) -> bool:
        """Return whether ``record`` was produced under the same inputs."""

        current = self.fingerprint()
        return all(record.get(key) == current[key] for key in _FINGERPRINT_KEYS)


class SourceRoutineLoader:
    """Load one routine source file into the current schema.

    A routine is only recompiled when it is missing from the live catalog or
    when its source, the placeholder values it uses, or the execution settings
    changed since the recorded metadata.
    """

    def __init__(self, conn: psycopg.Connection, logger: RunLogger) -> None:
        self._conn = conn
        self._logger = logger

    def load(
        self,
        unit: SourceUnit,
        substitutions: SubstitutionTable,
        prior_metadata: MetadataRecord | None,
        prior_live: LiveRoutineRecord | None,
        mode: str,
        character_set: str,
        collation: str,
    ) -> MetadataRecord | None:
        """Load ``unit`` and return its new metadata record.

        Returns:
            MetadataRecord | None: Fresh or unchanged record, ``None`` when the
            routine could not be loaded.
        """

        try:
            source = RoutineSource.read(Path(unit.path))
            replace = resolve_placeholders(source.text, substitutions)
        except (OSError, UnicodeDecodeError, SourceError) as exc:
            self._logger.fail(f"Error loading {unit.path}: {exc}")
            return None

        context = LoadContext(
            timestamp=source.timestamp,
            replace=replace,
            mode=mode,
            character_set=character_set,
            collation=collation,
        )
        if prior_metadata is not None and prior_live is not None and context.matches(prior_metadata):
            self._logger.debug(f"Routine {unit.routine_name} is up to date")
            return prior_metadata

        code = substitute(source.text, replace)
        try:
            header = parse_header(code, unit.routine_name)
        except SourceError as exc:
            self._logger.fail(f"Error loading {unit.path}: {exc}")
            return None

        self._logger.info(f"Loading {header.routine_type.lower()} {unit.routine_name}")
        try:
            parameters = self._compile(code, unit.routine_name, prior_live, context)
        except psycopg.Error as exc:
            self._logger.fail(f"Error loading {unit.path}: {exc}")
            return None

        record: MetadataRecord = {
            "routine_name": unit.routine_name,
            "routine_type": header.routine_type,
            "designation": find_designation(code),
            "parameters": parameters,
        }
        record.update(context.fingerprint())
        return record

    def _compile(
        self,
        code: str,
        routine_name: str,
        prior_live: LiveRoutineRecord | None,
        context: LoadContext,
    ) -> list[JsonValue]:
        with self._conn.transaction():
            self._conn.execute(_SET_CONFIG_SQL, ("search_path", context.mode))
            self._conn.execute(_SET_CONFIG_SQL, ("client_encoding", context.character_set))
            if prior_live is not None:
                drop_overloads(self._conn, prior_live.routine_type, prior_live.routine_name)
            self._conn.execute(cast(LiteralString, code))
            rows = self._conn.execute(_PARAMETERS_SQL, (routine_name,)).fetchall()
        return [{"name": name, "data_type": data_type, "mode": param_mode} for name, data_type, param_mode in rows]


__all__ = ["LoadContext", "SourceRoutineLoader"]
