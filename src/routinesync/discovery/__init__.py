# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source catalog strategies enumerating routine source units."""

from __future__ import annotations

from .base import CatalogResult, build_unit, matches_extension
from .explicit import ExplicitCatalog
from .filesystem import DirectoryCatalog, require_directory

__all__ = [
    "CatalogResult",
    "DirectoryCatalog",
    "ExplicitCatalog",
    "build_unit",
    "matches_extension",
    "require_directory",
]
