# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interface for deriving wrapper accessor names from routine names."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NamingStrategy(Protocol):
    """Derive the accessor name of the generated wrapper for a routine."""

    def derive_accessor_name(self, routine_name: str) -> str | None:
        """Return the accessor name for ``routine_name``.

        Args:
            routine_name: Logical routine name.

        Returns:
            str | None: Accessor name, or ``None`` when names are not mangled.
        """
        ...


__all__ = ["NamingStrategy"]
