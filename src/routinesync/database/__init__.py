# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PostgreSQL collaborators backed by psycopg."""

from __future__ import annotations

from .connection import connect
from .datalayer import PostgresDataLayer, normalize_search_path
from .routine_loader import SourceRoutineLoader
from .source import SourceError

__all__ = [
    "PostgresDataLayer",
    "SourceError",
    "SourceRoutineLoader",
    "connect",
    "normalize_search_path",
]
