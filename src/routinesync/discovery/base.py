# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared building blocks for source catalog strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath

from ..interfaces.naming import NamingStrategy
from ..models import ErrorSet, SourceUnit


@dataclass(frozen=True, slots=True)
class CatalogResult:
    """Units enumerated by a catalog together with recoverable failures."""

    units: tuple[SourceUnit, ...] = ()
    errors: ErrorSet = field(default_factory=ErrorSet)

    @property
    def routine_names(self) -> frozenset[str]:
        """Return the routine names of every enumerated unit."""

        return frozenset(unit.routine_name for unit in self.units)


def matches_extension(path: str | PurePath, extension: str) -> bool:
    """Return whether the final suffix of ``path`` equals ``extension`` exactly.

    Args:
        path: Candidate file path.
        extension: Configured extension including the leading dot.

    Returns:
        bool: ``True`` when the suffix matches, compared case-sensitively.
    """

    return PurePath(path).suffix == extension


def build_unit(path: str, naming: NamingStrategy) -> SourceUnit:
    """Create a :class:`SourceUnit` for ``path``.

    Args:
        path: Location of the source file.
        naming: Strategy deriving the accessor name.

    Returns:
        SourceUnit: Unit named after the file stem.
    """

    routine_name = PurePath(path).stem
    return SourceUnit(
        path=path,
        routine_name=routine_name,
        accessor_name=naming.derive_accessor_name(routine_name),
    )


__all__ = ["CatalogResult", "build_unit", "matches_extension"]
