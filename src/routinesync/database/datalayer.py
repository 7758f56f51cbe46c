# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PostgreSQL implementation of the database collaborators.

All queries are restricted to ``current_schema()``; routines owned by
extensions are never listed and therefore never dropped.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from ..interfaces.console import RunLogger
from ..models import ColumnType, LiveRoutineRecord

ROUTINE_KINDS: Final[dict[str, str]] = {"FUNCTION": "f", "PROCEDURE": "p"}

_COLUMN_TYPES_SQL: Final = """
    SELECT cls.relname AS table_name,
           att.attname AS column_name,
           format_type(att.atttypid, att.atttypmod) AS column_type
    FROM pg_catalog.pg_attribute att
    JOIN pg_catalog.pg_class cls ON cls.oid = att.attrelid
    JOIN pg_catalog.pg_namespace nsp ON nsp.oid = cls.relnamespace
    WHERE nsp.nspname = current_schema()
      AND cls.relkind IN ('r', 'v', 'm', 'p', 'f')
      AND att.attnum > 0
      AND NOT att.attisdropped
    ORDER BY cls.relname, att.attnum
"""

_ROUTINES_SQL: Final = """
    SELECT p.proname AS routine_name,
           CASE p.prokind WHEN 'p' THEN 'PROCEDURE' ELSE 'FUNCTION' END AS routine_type,
           l.lanname AS language,
           pg_get_function_identity_arguments(p.oid) AS arguments
    FROM pg_catalog.pg_proc p
    JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace
    JOIN pg_catalog.pg_language l ON l.oid = p.prolang
    WHERE n.nspname = current_schema()
      AND p.prokind IN ('f', 'p')
      AND NOT EXISTS (
          SELECT 1 FROM pg_catalog.pg_depend d
          WHERE d.classid = 'pg_catalog.pg_proc'::regclass
            AND d.objid = p.oid
            AND d.deptype = 'e'
      )
    ORDER BY p.proname, p.oid
"""

_OVERLOADS_SQL: Final = """
    SELECT pg_get_function_identity_arguments(p.oid) AS arguments
    FROM pg_catalog.pg_proc p
    JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace
    WHERE n.nspname = current_schema()
      AND p.proname = %s
      AND p.prokind = %s
    ORDER BY p.oid
"""

_SEARCH_PATH_ITEM: Final[re.Pattern[str]] = re.compile(r'"(?:[^"]|"")*"|[^,\s][^,]*')


def normalize_search_path(value: str) -> str:
    """Return ``value`` as a canonical ``search_path`` list.

    Items are trimmed, unquoted identifiers are folded to lower case, quoted
    identifiers are kept verbatim and repeated schemas are dropped.

    Args:
        value: Comma separated list of schema names.

    Returns:
        str: Items joined with ``", "``.
    """

    items: list[str] = []
    for match in _SEARCH_PATH_ITEM.finditer(value):
        item = match.group(0).strip()
        if not item.startswith('"'):
            item = item.lower()
        if item not in items:
            items.append(item)
    return ", ".join(items)


def routine_kind(routine_type: str) -> str:
    """Return the ``pg_proc.prokind`` code of ``routine_type``.

    Raises:
        ValueError: If ``routine_type`` is neither a function nor a procedure.
    """

    try:
        return ROUTINE_KINDS[routine_type.upper()]
    except KeyError as exc:
        raise ValueError(f"unsupported routine type '{routine_type}'") from exc


def drop_overloads(conn: psycopg.Connection, routine_type: str, routine_name: str) -> int:
    """Drop every overload of ``routine_name`` in the current schema.

    Args:
        conn: Open connection; the caller controls the transaction.
        routine_type: ``FUNCTION`` or ``PROCEDURE``.
        routine_name: Unqualified routine name.

    Returns:
        int: Number of routines dropped.
    """

    keyword = routine_type.upper()
    rows = conn.execute(_OVERLOADS_SQL, (routine_name, routine_kind(keyword))).fetchall()
    for (arguments,) in rows:
        conn.execute(
            sql.SQL("DROP {kind} {name}({arguments})").format(
                kind=sql.SQL(keyword),
                name=sql.Identifier(routine_name),
                arguments=sql.SQL(arguments),
            ),
        )
    return len(rows)


class PostgresDataLayer:
    """Database collaborators backed by one psycopg connection."""

    def __init__(self, conn: psycopg.Connection, *, logger: RunLogger | None = None) -> None:
        self._conn = conn
        self._logger = logger

    def list_column_types(self) -> Sequence[ColumnType]:
        with self._conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(_COLUMN_TYPES_SQL)
            return [
                ColumnType(
                    table_name=row["table_name"],
                    column_name=row["column_name"],
                    column_type=row["column_type"],
                )
                for row in cursor.fetchall()
            ]

    def list_routines(self) -> Sequence[LiveRoutineRecord]:
        with self._conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(_ROUTINES_SQL)
            return [
                LiveRoutineRecord(
                    routine_type=row["routine_type"],
                    routine_name=row["routine_name"],
                    extras={"language": row["language"], "arguments": row["arguments"]},
                )
                for row in cursor.fetchall()
            ]

    def drop_routine(self, routine_type: str, routine_name: str) -> bool:
        """Drop every overload of a routine inside one transaction.

        Args:
            routine_type: ``FUNCTION`` or ``PROCEDURE``.
            routine_name: Unqualified routine name.

        Returns:
            bool: ``False`` when PostgreSQL rejected the drop.
        """

        try:
            with self._conn.transaction():
                drop_overloads(self._conn, routine_type, routine_name)
        except (psycopg.Error, ValueError) as exc:
            if self._logger is not None:
                self._logger.fail(f"Dropping {routine_type.lower()} {routine_name} failed: {exc}")
            return False
        return True

    def normalize_mode(self, mode: str) -> str:
        return normalize_search_path(mode)


__all__ = [
    "PostgresDataLayer",
    "drop_overloads",
    "normalize_search_path",
    "routine_kind",
]
