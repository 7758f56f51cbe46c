# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse routine source files before they are sent to PostgreSQL."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"@[A-Za-z0-9_.]+(?:%type)?@", re.IGNORECASE)
_HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\bcreate\s+(?:or\s+replace\s+)?(?P<kind>function|procedure)\s+"
    r"(?P<name>(?:\"(?:[^\"]|\"\")+\"|[\w$]+)(?:\s*\.\s*(?:\"(?:[^\"]|\"\")+\"|[\w$]+))?)",
    re.IGNORECASE,
)
_DESIGNATION_PATTERN: Final[re.Pattern[str]] = re.compile(r"@type\s+(?P<designation>[A-Za-z_]\w*)")


class SourceError(ValueError):
    """Raised when a routine source cannot be prepared for loading."""


@dataclass(frozen=True, slots=True)
class RoutineSource:
    """Text and modification time of a routine source file."""

    path: Path
    text: str
    timestamp: int

    @classmethod
    def read(cls, path: Path) -> RoutineSource:
        """Read ``path`` as UTF-8.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """

        text = path.read_text(encoding="utf-8")
        return cls(path=path, text=text, timestamp=int(path.stat().st_mtime))


@dataclass(frozen=True, slots=True)
class RoutineHeader:
    """Kind and name declared by a ``CREATE FUNCTION|PROCEDURE`` statement."""

    routine_type: str
    routine_name: str


def resolve_placeholders(text: str, substitutions: Mapping[str, str]) -> dict[str, str]:
    """Return the substitution values of every placeholder used in ``text``.

    Args:
        text: Routine source.
        substitutions: Table keyed by upper-cased placeholder token.

    Returns:
        dict[str, str]: Upper-cased token mapped to its replacement.

    Raises:
        SourceError: If a placeholder has no entry in ``substitutions``.
    """

    used: dict[str, str] = {}
    for match in PLACEHOLDER_PATTERN.finditer(text):
        token = match.group(0).upper()
        if token in used:
            continue
        if token not in substitutions:
            raise SourceError(f"unknown placeholder {match.group(0)}")
        used[token] = substitutions[token]
    return used


def substitute(text: str, replacements: Mapping[str, str]) -> str:
    """Replace every placeholder in ``text`` using ``replacements``."""

    return PLACEHOLDER_PATTERN.sub(lambda match: replacements[match.group(0).upper()], text)


def _unquote(identifier: str) -> str:
    identifier = identifier.strip()
    if identifier.startswith('"'):
        return identifier[1:-1].replace('""', '"')
    return identifier.lower()


def parse_header(text: str, routine_name: str) -> RoutineHeader:
    """Return the routine header of ``text`` and check its name.

    Unquoted identifiers are folded to lower case the way PostgreSQL folds
    them; a schema qualification is ignored.

    Args:
        text: Routine source after substitution.
        routine_name: Name derived from the source file name.

    Returns:
        RoutineHeader: Declared kind (``FUNCTION`` or ``PROCEDURE``) and name.

    Raises:
        SourceError: If no header is found or it declares another routine.
    """

    match = _HEADER_PATTERN.search(text)
    if match is None:
        raise SourceError("no CREATE FUNCTION or CREATE PROCEDURE statement found")
    declared = _unquote(match.group("name").split(".")[-1])
    if declared != routine_name:
        raise SourceError(f"source declares routine '{declared}', expected '{routine_name}'")
    return RoutineHeader(routine_type=match.group("kind").upper(), routine_name=declared)


def find_designation(text: str) -> str | None:
    """Return the ``@type`` designation tag of ``text`` when present."""

    match = _DESIGNATION_PATTERN.search(text)
    return match.group("designation") if match else None


__all__ = [
    "PLACEHOLDER_PATTERN",
    "RoutineHeader",
    "RoutineSource",
    "SourceError",
    "find_designation",
    "parse_header",
    "resolve_placeholders",
    "substitute",
]
