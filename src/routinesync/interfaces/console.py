# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interface for the user-facing logger handed to the engine and loaders."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class RunLogger(Protocol):
    """Minimal logging surface used while reconciling routines."""

    def info(self, message: str) -> None:
        """Emit an informational message."""
        ...

    def ok(self, message: str) -> None:
        """Emit a success message."""
        ...

    def warn(self, message: str) -> None:
        """Emit a warning message."""
        ...

    def fail(self, message: str) -> None:
        """Emit an error message."""
        ...

    def debug(self, message: str) -> None:
        """Emit a debug message when debugging is enabled."""
        ...

    def listing(self, items: Sequence[str]) -> None:
        """Emit a bulleted list of items."""
        ...


__all__ = ["RunLogger"]
