# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the placeholder substitution table applied to routine sources."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from .interfaces.console import RunLogger
from .interfaces.database import ColumnTypeSource, ConstantsSource
from .models import ColumnType

_NUMERIC_STRING: Final[re.Pattern[str]] = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def column_type_key(table_name: str, column_name: str) -> str:
    """Return the placeholder token for a table column type.

    Args:
        table_name: Table owning the column.
        column_name: Column whose type is referenced.

    Returns:
        str: Upper-cased ``@TABLE.COLUMN%TYPE@`` token.
    """

    return f"@{table_name}.{column_name}%type@".upper()


def constant_key(name: str) -> str:
    """Return the placeholder token for a named constant."""

    return f"@{name}@"


def is_numeric(value: object) -> bool:
    """Return whether ``value`` can be substituted without quoting.

    Args:
        value: Constant value to inspect.

    Returns:
        bool: ``True`` for numbers and numeric strings; booleans are not numeric.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    return isinstance(value, str) and _NUMERIC_STRING.match(value) is not None


def render_constant(value: object) -> str:
    """Render ``value`` as an SQL literal.

    Args:
        value: Constant value to render.

    Returns:
        str: The value verbatim when numeric, otherwise a single-quoted string
        literal with embedded quotes doubled.
    """

    if is_numeric(value):
        return str(value).strip()
    text = str(value).replace("'", "''")
    return f"'{text}'"


def column_type_substitutions(columns: Iterable[ColumnType]) -> dict[str, str]:
    """Return substitution entries for ``columns``."""

    table: dict[str, str] = {}
    for column in columns:
        value = column.column_type
        if column.character_set:
            value = f"{value} character set {column.character_set}"
        table[column_type_key(column.table_name, column.column_name)] = value
    return table


def constant_substitutions(constants: Mapping[str, object]) -> dict[str, str]:
    """Return substitution entries for ``constants``."""

    return {constant_key(name): render_constant(value) for name, value in constants.items()}


@dataclass(frozen=True, slots=True)
class SubstitutionStats:
    """Counts reported after building a substitution table."""

    column_types: int
    constants: int
    constants_origin: str | None = None


def build_substitution_table(
    column_source: ColumnTypeSource,
    constants_source: ConstantsSource | None,
    *,
    logger: RunLogger,
) -> tuple[dict[str, str], SubstitutionStats]:
    """Build the substitution table from column types and constants.

    Constants are applied after column types, so a constant wins when both
    produce the same token.

    Args:
        column_source: Collaborator listing table column types.
        constants_source: Optional collaborator listing named constants.
        logger: Logger receiving progress messages.

    Returns:
        tuple[dict[str, str], SubstitutionStats]: The table and its counts.
    """

    columns = list(column_source.list_column_types())
    table = column_type_substitutions(columns)
    logger.info(f"Selected {len(columns)} column types for substitution")

    if constants_source is None:
        return table, SubstitutionStats(column_types=len(columns), constants=0)

    constants = constants_source.list_constants()
    table.update(constant_substitutions(constants))
    origin = constants_source.describe()
    logger.info(f"Read {len(constants)} constants for substitution from {origin}")
    return table, SubstitutionStats(column_types=len(columns), constants=len(constants), constants_origin=origin)


__all__ = [
    "SubstitutionStats",
    "build_substitution_table",
    "column_type_key",
    "column_type_substitutions",
    "constant_key",
    "constant_substitutions",
    "is_numeric",
    "render_constant",
]
