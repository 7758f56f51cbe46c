# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect source units that cannot be loaded side by side."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .models import ErrorKind, ErrorSet, SourceUnit


@dataclass(frozen=True, slots=True)
class ConflictReport:
    """Partition of a catalog into accepted and conflicting units.

    Attributes:
        accepted: Units with a unique routine name and accessor name, in input order.
        conflicts: Groups sharing an accessor name, keyed by that name.
        duplicates: Groups sharing a routine name, keyed by that name.
    """

    accepted: tuple[SourceUnit, ...]
    conflicts: dict[str, tuple[SourceUnit, ...]] = field(default_factory=dict)
    duplicates: dict[str, tuple[SourceUnit, ...]] = field(default_factory=dict)

    @property
    def rejected(self) -> tuple[SourceUnit, ...]:
        """Return every unit removed because of a conflict, each once."""

        return tuple(self._reasons())

    @property
    def errors(self) -> ErrorSet:
        """Return one ``CONFLICT`` error per rejected unit."""

        errors = ErrorSet()
        for unit, reason in self._reasons().items():
            errors.add(unit.path, ErrorKind.CONFLICT, reason)
        return errors

    def _reasons(self) -> dict[SourceUnit, str]:
        reasons: dict[SourceUnit, str] = {}
        for routine_name, group in self.duplicates.items():
            for unit in group:
                reasons.setdefault(unit, f"routine name '{routine_name}' is not unique")
        for accessor_name, group in self.conflicts.items():
            for unit in group:
                reasons.setdefault(unit, f"accessor name '{accessor_name}' is not unique")
        return reasons


def _colliding(
    units: Sequence[SourceUnit],
    key: Callable[[SourceUnit], str | None],
) -> dict[str, tuple[SourceUnit, ...]]:
    groups: defaultdict[str, list[SourceUnit]] = defaultdict(list)
    for unit in units:
        name = key(unit)
        if name is not None:
            groups[name].append(unit)
    return {
        name: tuple(sorted(members, key=lambda unit: unit.path))
        for name, members in sorted(groups.items())
        if len(members) > 1
    }


def detect_conflicts(units: Sequence[SourceUnit]) -> ConflictReport:
    """Split ``units`` into accepted units and conflicting groups.

    Two units conflict when they define the same routine or, under a naming
    strategy, map to the same wrapper accessor. Units without an accessor name
    never collide on it. Every member of a colliding group is rejected, not
    only the extras.

    Args:
        units: Units produced by a source catalog.

    Returns:
        ConflictReport: Accepted units and the conflicting groups.
    """

    duplicates = _colliding(units, lambda unit: unit.routine_name)
    conflicts = _colliding(units, lambda unit: unit.accessor_name)
    accepted = tuple(
        unit for unit in units if unit.routine_name not in duplicates and unit.accessor_name not in conflicts
    )
    return ConflictReport(accepted=accepted, conflicts=conflicts, duplicates=duplicates)


__all__ = ["ConflictReport", "detect_conflicts"]
