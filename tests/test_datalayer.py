# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the PostgreSQL data layer."""

from __future__ import annotations

import psycopg
import pytest
from psycopg import sql

from routinesync.database import PostgresDataLayer, normalize_search_path
from routinesync.database.datalayer import routine_kind
from routinesync.interfaces import DataLayer

from .fakes import FakeConnection, RecordingLogger


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        ("App, PUBLIC", "app, public"),
        ('  "$user" ,public,public ', '"$user", public'),
        ('"Odd,Name", other', '"Odd,Name", other'),
        ("", ""),
    ],
)
def test_normalize_search_path(mode: str, expected: str) -> None:
    assert normalize_search_path(mode) == expected


def test_data_layer_satisfies_protocol() -> None:
    data_layer = PostgresDataLayer(FakeConnection())

    assert isinstance(data_layer, DataLayer)
    assert data_layer.normalize_mode("A,b") == "a, b"


def test_list_column_types_reads_current_schema() -> None:
    conn = FakeConnection(
        responses={
            "format_type": [
                {"table_name": "users", "column_name": "id", "column_type": "integer"},
                {"table_name": "users", "column_name": "name", "column_type": "character varying(40)"},
            ],
        },
    )

    columns = PostgresDataLayer(conn).list_column_types()

    assert [(column.table_name, column.column_name, column.column_type) for column in columns] == [
        ("users", "id", "integer"),
        ("users", "name", "character varying(40)"),
    ]
    assert all(column.character_set is None for column in columns)


def test_list_routines_maps_kinds_and_extras() -> None:
    conn = FakeConnection(
        responses={
            "pg_catalog.pg_language": [
                {"routine_name": "add", "routine_type": "FUNCTION", "language": "sql", "arguments": "a int"},
                {"routine_name": "purge", "routine_type": "PROCEDURE", "language": "plpgsql", "arguments": ""},
            ],
        },
    )

    routines = PostgresDataLayer(conn).list_routines()

    assert [(record.routine_type, record.routine_name) for record in routines] == [
        ("FUNCTION", "add"),
        ("PROCEDURE", "purge"),
    ]
    assert routines[0].extras == {"language": "sql", "arguments": "a int"}


def test_drop_routine_drops_every_overload() -> None:
    conn = FakeConnection(responses={"pg_get_function_identity_arguments": [("a integer",), ("a text",)]})

    assert PostgresDataLayer(conn).drop_routine("FUNCTION", "add") is True

    assert conn.params[0] == ("add", "f")
    assert sum(isinstance(statement, sql.Composed) for statement in conn.statements) == 2
    assert conn.statements[0] == "BEGIN"
    assert conn.statements[-1] == "COMMIT"


def test_drop_routine_reports_database_errors() -> None:
    conn = FakeConnection(
        responses={"pg_get_function_identity_arguments": [("",)]},
        failures={"DROP": psycopg.errors.DependentObjectsStillExist("other objects depend on it")},
    )
    logger = RecordingLogger()

    assert PostgresDataLayer(conn, logger=logger).drop_routine("PROCEDURE", "purge") is False

    assert conn.statements[-1] == "ROLLBACK"
    assert logger.of("fail") == ["Dropping procedure purge failed: other objects depend on it"]


def test_routine_kind_rejects_unknown_types() -> None:
    assert routine_kind("procedure") == "p"
    with pytest.raises(ValueError, match="unsupported routine type"):
        routine_kind("AGGREGATE")
