# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Database access interfaces consumed by the reconciliation engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from ..models import ColumnType, LiveRoutineRecord


@runtime_checkable
class ColumnTypeSource(Protocol):
    """Provide column type information for ``%TYPE`` placeholders."""

    def list_column_types(self) -> Sequence[ColumnType]:
        """Return the column types of every table visible to the loader.

        Returns:
            Sequence[ColumnType]: Column descriptions in any order.
        """
        ...


@runtime_checkable
class ConstantsSource(Protocol):
    """Provide named constants substituted as ``@NAME@`` placeholders."""

    def list_constants(self) -> Mapping[str, object]:
        """Return the constants keyed by name.

        Returns:
            Mapping[str, object]: Constant values keyed by their name.
        """
        ...

    def describe(self) -> str:
        """Return a human-readable description of where constants came from."""
        ...


@runtime_checkable
class ModeNormalizer(Protocol):
    """Normalise the configured execution mode into its canonical form."""

    def normalize_mode(self, mode: str) -> str:
        """Return ``mode`` in the form the database expects.

        Args:
            mode: Mode string as written in the configuration.

        Returns:
            str: Canonical mode string.
        """
        ...


@runtime_checkable
class RoutineCatalogReader(Protocol):
    """List the routines currently stored in the database."""

    def list_routines(self) -> Sequence[LiveRoutineRecord]:
        """Return the live routine catalog.

        Returns:
            Sequence[LiveRoutineRecord]: One record per stored routine.
        """
        ...


@runtime_checkable
class RoutineDropper(Protocol):
    """Remove routines from the database."""

    def drop_routine(self, routine_type: str, routine_name: str) -> bool:
        """Drop a routine.

        Args:
            routine_type: Routine kind, e.g. ``FUNCTION`` or ``PROCEDURE``.
            routine_name: Name of the routine to drop.

        Returns:
            bool: ``True`` when the routine was dropped.
        """
        ...


@runtime_checkable
class DataLayer(ColumnTypeSource, ModeNormalizer, RoutineCatalogReader, RoutineDropper, Protocol):
    """Aggregate of the database operations the engine requires."""


__all__ = [
    "ColumnTypeSource",
    "ConstantsSource",
    "DataLayer",
    "ModeNormalizer",
    "RoutineCatalogReader",
    "RoutineDropper",
]
