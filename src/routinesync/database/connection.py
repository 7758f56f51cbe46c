# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Open psycopg connections for a reconciliation run."""

from __future__ import annotations

import psycopg
from psycopg import sql

from ..config import DatabaseSettings


def connect(settings: DatabaseSettings) -> psycopg.Connection:
    """Return an autocommit connection to the configured database.

    Every statement outside an explicit ``conn.transaction()`` block commits
    on its own. When a schema is configured it becomes the session
    ``search_path``.

    Args:
        settings: Validated database settings.

    Returns:
        psycopg.Connection: Open connection.

    Raises:
        psycopg.OperationalError: If the server cannot be reached.
    """

    conn = psycopg.connect(settings.conninfo(), autocommit=True)
    if settings.schema_name:
        conn.execute(sql.SQL("SET search_path TO {}").format(sql.Identifier(settings.schema_name)))
    return conn


__all__ = ["connect"]
