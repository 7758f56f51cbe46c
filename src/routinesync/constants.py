# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Constants sources feeding ``@NAME@`` placeholders."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from types import ModuleType

from .imports import import_reference


def _is_constant_name(name: str) -> bool:
    return not name.startswith("_") and name.isupper()


class ModuleConstantsSource:
    """Read public UPPER_CASE attributes of a module or class as constants."""

    def __init__(self, reference: str) -> None:
        """Remember the import reference; the import happens lazily.

        Args:
            reference: ``pkg.module`` or ``pkg.module:Class`` reference.
        """

        self._reference = reference
        self._target: object | None = None

    def resolve(self) -> object:
        """Import and return the referenced module or class.

        Raises:
            ConfigurationError: If the reference cannot be imported.
        """

        if self._target is None:
            self._target = import_reference(self._reference, context="constants.module")
        return self._target

    def list_constants(self) -> Mapping[str, object]:
        target = self.resolve()
        names = vars(target) if isinstance(target, ModuleType) else dict(inspect.getmembers(target))
        return {
            name: value
            for name, value in sorted(names.items())
            if _is_constant_name(name) and not callable(value) and not isinstance(value, ModuleType)
        }

    def describe(self) -> str:
        target = self.resolve()
        try:
            location = inspect.getsourcefile(target)  # type: ignore[arg-type]
        except TypeError:
            location = None
        return location or self._reference


class MappingConstantsSource:
    """Serve constants from an in-memory mapping."""

    def __init__(self, constants: Mapping[str, object], *, name: str = "mapping") -> None:
        self._constants = dict(constants)
        self._name = name

    def list_constants(self) -> Mapping[str, object]:
        return dict(self._constants)

    def describe(self) -> str:
        return self._name


__all__ = ["MappingConstantsSource", "ModuleConstantsSource"]
