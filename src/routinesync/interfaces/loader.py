# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interface implemented by components that load one source unit."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import LiveRoutineRecord, MetadataRecord, SourceUnit, SubstitutionTable


@runtime_checkable
class UnitLoader(Protocol):
    """Compile one source unit into a stored routine."""

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
        """Load ``unit`` into the database.

        Args:
            unit: Source unit to load.
            substitutions: Placeholder table applied to the source text.
            prior_metadata: Metadata recorded for the routine by a previous run.
            prior_live: Live catalog entry for the routine at run start.
            mode: Normalised execution mode.
            character_set: Character set the routine is loaded under.
            collation: Collation the routine is loaded under.

        Returns:
            MetadataRecord | None: Fresh metadata on success, ``None`` on failure.
        """
        ...


__all__ = ["UnitLoader"]
