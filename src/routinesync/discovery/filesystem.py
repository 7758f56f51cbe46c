# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Directory-tree source catalog."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from ..errors import ConfigurationError
from ..interfaces.naming import NamingStrategy
from ..naming import NullNamingStrategy
from .base import CatalogResult, build_unit, matches_extension


def require_directory(root: Path) -> None:
    """Raise unless ``root`` is an existing directory.

    Raises:
        ConfigurationError: If ``root`` is missing or is not a directory.
    """

    if not os.path.isdir(root):
        raise ConfigurationError(f"Source directory {root} does not exist or is not a directory")


class DirectoryCatalog:
    """Enumerate every source file below a directory, following symlinks."""

    def __init__(self, extension: str, *, naming: NamingStrategy | None = None) -> None:
        """Create a catalog selecting files with ``extension``.

        Args:
            extension: File extension (with leading dot) of routine sources.
            naming: Optional naming strategy; defaults to no mangling.
        """

        self.extension = extension
        self.naming = naming or NullNamingStrategy()

    def enumerate(self, root: Path) -> CatalogResult:
        """Return a unit for every matching file below ``root``.

        Args:
            root: Directory holding the routine sources.

        Returns:
            CatalogResult: Units in sorted path order; never carries errors.

        Raises:
            ConfigurationError: If ``root`` is not an existing directory.
        """

        require_directory(root)
        units = tuple(build_unit(path, self.naming) for path in self._walk(root))
        return CatalogResult(units=units)

    def _walk(self, root: Path) -> Iterator[str]:
        """Yield matching file paths below ``root``.

        Directories are identified by ``(st_dev, st_ino)``; a directory reached
        twice through symbolic links is only descended once.

        Args:
            root: Directory at which the walk starts.

        Yields:
            str: Paths of regular files with the configured extension.
        """

        visited: set[tuple[int, int]] = set()
        for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
            try:
                stat = os.stat(dirpath)
            except OSError:
                dirnames[:] = []
                continue
            identity = (stat.st_dev, stat.st_ino)
            if identity in visited:
                dirnames[:] = []
                continue
            visited.add(identity)
            dirnames.sort()
            for filename in sorted(filenames):
                candidate = os.path.join(dirpath, filename)
                if matches_extension(filename, self.extension) and os.path.isfile(candidate):
                    yield candidate


__all__ = ["DirectoryCatalog", "require_directory"]
