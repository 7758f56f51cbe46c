# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Explicit file-list source catalog."""

from __future__ import annotations

import os
from collections.abc import Iterable

from ..interfaces.console import RunLogger
from ..interfaces.naming import NamingStrategy
from ..models import ErrorKind, ErrorSet, SourceUnit
from ..naming import NullNamingStrategy
from .base import CatalogResult, build_unit, matches_extension


class ExplicitCatalog:
    """Build units from paths named by the user."""

    def __init__(
        self,
        extension: str,
        *,
        naming: NamingStrategy | None = None,
        logger: RunLogger | None = None,
    ) -> None:
        """Create a catalog selecting paths with ``extension``.

        Args:
            extension: File extension (with leading dot) of routine sources.
            naming: Optional naming strategy; defaults to no mangling.
            logger: Optional logger told about every missing path.
        """

        self.extension = extension
        self.naming = naming or NullNamingStrategy()
        self.logger = logger

    def enumerate(self, paths: Iterable[str]) -> CatalogResult:
        """Return units for the existing paths with the configured extension.

        Missing paths are recorded as ``NOT_FOUND`` errors, paths with another
        extension are skipped silently and repeated paths are only used once.
        Paths are compared after ``os.path.normpath``, so ``a.psql`` and
        ``./a.psql`` name the same file; the first spelling is kept.

        Args:
            paths: Paths exactly as supplied by the caller.

        Returns:
            CatalogResult: Units in input order plus missing-path errors.
        """

        units: list[SourceUnit] = []
        errors = ErrorSet()
        distinct: dict[str, str] = {}
        for path in paths:
            distinct.setdefault(os.path.normpath(path), path)
        for path in distinct.values():
            if not os.path.exists(path):
                if self.logger is not None:
                    self.logger.fail(f"File not exists: '{path}'")
                errors.add(path, ErrorKind.NOT_FOUND, "file does not exist")
                continue
            if matches_extension(path, self.extension):
                units.append(build_unit(path, self.naming))
        return CatalogResult(units=tuple(units), errors=errors)


__all__ = ["ExplicitCatalog"]
