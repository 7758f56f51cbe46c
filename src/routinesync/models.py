# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data structures shared across catalog, engine and collaborators."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TypeAlias

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]

MetadataRecord: TypeAlias = dict[str, JsonValue]
MetadataSnapshot: TypeAlias = dict[str, MetadataRecord]
SubstitutionTable: TypeAlias = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """One candidate routine definition discovered on disk.

    Attributes:
        path: Location of the source file, unique within a run.
        routine_name: Logical routine name derived from the file name.
        accessor_name: Wrapper name produced by the naming strategy, or
            ``None`` when no strategy is configured.
    """

    path: str
    routine_name: str
    accessor_name: str | None = None


@dataclass(frozen=True, slots=True)
class LiveRoutineRecord:
    """Describe one routine present in the database catalog at run start."""

    routine_type: str
    routine_name: str
    extras: Mapping[str, JsonValue] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class ColumnType:
    """Column type information used to build ``%TYPE`` placeholders."""

    table_name: str
    column_name: str
    column_type: str
    character_set: str | None = None


class ErrorKind(str, Enum):
    """Enumerate the recoverable error kinds recorded in an :class:`ErrorSet`."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNIT_LOAD_FAILURE = "unit_load_failure"


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    """Single recoverable failure attached to a source path."""

    path: str
    kind: ErrorKind
    message: str = ""


@dataclass(slots=True)
class ErrorSet:
    """Ordered collection of paths that could not be (re)loaded."""

    entries: list[ErrorEntry] = field(default_factory=list)

    def add(self, path: str, kind: ErrorKind, message: str = "") -> None:
        """Append a failure for ``path``.

        Args:
            path: Source path that failed.
            kind: Category of the failure.
            message: Optional human-readable detail.
        """

        self.entries.append(ErrorEntry(path=path, kind=kind, message=message))

    def extend(self, other: Iterable[ErrorEntry]) -> None:
        """Append every entry from ``other`` preserving order."""

        self.entries.extend(other)

    @property
    def paths(self) -> list[str]:
        """Return the failing paths in the order they were recorded."""

        return [entry.path for entry in self.entries]

    def of_kind(self, kind: ErrorKind) -> list[ErrorEntry]:
        """Return the entries matching ``kind``."""

        return [entry for entry in self.entries if entry.kind is kind]

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


class UnitState(str, Enum):
    """Lifecycle states of a unit within one run."""

    PENDING = "pending"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class RunMode(str, Enum):
    """Scope of a reconciliation run."""

    FULL = "full"
    LIST = "list"


@dataclass(slots=True)
class RunResult:
    """Outcome of one reconciliation run threaded through every phase.

    Attributes:
        mode: Whether the run covered the whole source tree or a list.
        accepted_units: Units that survived conflict detection.
        rejected_paths: Paths removed because of accessor-name conflicts.
        metadata: Metadata snapshot as persisted at the end of the run.
        errors: Recoverable failures collected during the run.
        states: Final state of every accepted unit keyed by routine name.
        dropped: Obsolete routines successfully dropped (full runs only).
        failed_drops: Obsolete routines the dropper could not remove.
    """

    mode: RunMode
    accepted_units: tuple[SourceUnit, ...] = ()
    rejected_paths: tuple[str, ...] = ()
    metadata: MetadataSnapshot = field(default_factory=dict)
    errors: ErrorSet = field(default_factory=ErrorSet)
    states: dict[str, UnitState] = field(default_factory=dict)
    dropped: list[LiveRoutineRecord] = field(default_factory=list)
    failed_drops: list[LiveRoutineRecord] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        """Return ``1`` when any recoverable error was recorded, else ``0``."""

        return 1 if self.errors else 0


__all__ = [
    "ColumnType",
    "ErrorEntry",
    "ErrorKind",
    "ErrorSet",
    "JsonScalar",
    "JsonValue",
    "LiveRoutineRecord",
    "MetadataRecord",
    "MetadataSnapshot",
    "RunMode",
    "RunResult",
    "SourceUnit",
    "SubstitutionTable",
    "UnitState",
]
