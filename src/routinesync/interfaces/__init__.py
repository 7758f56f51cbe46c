# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocol interfaces for the collaborators of the reconciliation engine."""

from __future__ import annotations

from .console import RunLogger
from .database import (
    ColumnTypeSource,
    ConstantsSource,
    DataLayer,
    ModeNormalizer,
    RoutineCatalogReader,
    RoutineDropper,
)
from .loader import UnitLoader
from .naming import NamingStrategy

__all__ = [
    "ColumnTypeSource",
    "ConstantsSource",
    "DataLayer",
    "ModeNormalizer",
    "NamingStrategy",
    "RoutineCatalogReader",
    "RoutineDropper",
    "RunLogger",
    "UnitLoader",
]
