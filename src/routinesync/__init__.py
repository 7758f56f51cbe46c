# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Synchronise stored routines with their source files.

The reconciliation core lives in :mod:`routinesync.engine`; PostgreSQL
collaborators are in :mod:`routinesync.database` and the command line in
:mod:`routinesync.cli`.
"""

from __future__ import annotations

from importlib import metadata

from .engine import Collaborators, EngineSettings, ReconciliationEngine
from .errors import RoutineSyncError
from .models import ErrorSet, RunMode, RunResult

try:
    __version__ = metadata.version("routinesync")
except metadata.PackageNotFoundError:  # pragma: no cover - source checkout without install
    __version__ = "0.0.0"

__all__ = [
    "Collaborators",
    "EngineSettings",
    "ErrorSet",
    "ReconciliationEngine",
    "RoutineSyncError",
    "RunMode",
    "RunResult",
    "__version__",
]
