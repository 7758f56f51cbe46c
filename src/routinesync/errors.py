# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy shared by the reconciliation engine and its collaborators."""

from __future__ import annotations

from pathlib import Path


class RoutineSyncError(Exception):
    """Base class for errors that abort a reconciliation run."""


class ConfigurationError(RoutineSyncError):
    """Raised when a required setting is missing or invalid."""


class MetadataCorruptError(RoutineSyncError):
    """Raised when the metadata snapshot cannot be parsed or serialized."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialise the error with the offending file and a reason.

        Args:
            path: Location of the metadata file.
            reason: Human-readable description of the problem.
        """

        super().__init__(f"Metadata file {path} is corrupt: {reason}")
        self.path = path
        self.reason = reason


class PersistenceFailureError(RoutineSyncError):
    """Raised when the two-phase metadata write cannot complete."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialise the error with the target file and a reason.

        Args:
            path: Metadata file that could not be replaced.
            reason: Human-readable description of the I/O failure.
        """

        super().__init__(f"Unable to write metadata file {path}: {reason}")
        self.path = path
        self.reason = reason


class UnitLoadFailure(Exception):
    """Raised by unit loaders that report a failed load via exceptions.

    The engine treats this exactly like a loader returning ``None``: the unit
    is recorded as failed and the run continues.
    """


__all__ = [
    "ConfigurationError",
    "MetadataCorruptError",
    "PersistenceFailureError",
    "RoutineSyncError",
    "UnitLoadFailure",
]
