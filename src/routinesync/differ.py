# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compare the source catalog with the live routine catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import LiveRoutineRecord, SourceUnit


def find_obsolete(
    live: Mapping[str, LiveRoutineRecord],
    units: Iterable[SourceUnit],
) -> list[LiveRoutineRecord]:
    """Return live routines that no longer have a source unit.

    Args:
        live: Live catalog keyed by routine name.
        units: Accepted source units of the current run.

    Returns:
        list[LiveRoutineRecord]: Obsolete routines sorted by routine name.
    """

    known = {unit.routine_name for unit in units}
    return [live[name] for name in sorted(live) if name not in known]


__all__ = ["find_obsolete"]
