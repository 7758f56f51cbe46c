# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the reconciliation engine against in-memory collaborators."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from routinesync.constants import MappingConstantsSource
from routinesync.engine import prune_metadata
from routinesync.errors import ConfigurationError, MetadataCorruptError
from routinesync.models import ColumnType, ErrorKind, RunMode, SourceUnit, UnitState
from routinesync.naming import CamelCaseNamingStrategy

from .fakes import FakeDataLayer, FakeLoader, RecordingLogger


def test_full_run_loads_units_in_routine_name_order(make_engine, write_source, source_dir, loader) -> None:
    write_source("zeta.psql")
    write_source("alpha.psql", subdir="nested")
    write_source("mid.psql")
    write_source("notes.txt")

    result = make_engine().run_full(source_dir)

    assert loader.loaded == ["alpha", "mid", "zeta"]
    assert result.mode is RunMode.FULL
    assert result.exit_code == 0
    assert set(result.metadata) == {"alpha", "mid", "zeta"}
    assert all(state is UnitState.LOADED for state in result.states.values())


def test_loader_receives_normalized_mode_and_prior_views(
    make_engine, write_source, source_dir, loader, data_layer, metadata_path
) -> None:
    write_source("get_user.psql")
    data_layer.add_routine("get_user")
    metadata_path.parent.mkdir(parents=True)
    metadata_path.write_text(json.dumps({"get_user": {"routine_name": "get_user", "timestamp": 1}}))

    make_engine().run_full(source_dir)

    (call,) = loader.calls
    assert call.mode == "app, public"
    assert call.character_set == "UTF8"
    assert call.collation == "C"
    assert call.prior_metadata == {"routine_name": "get_user", "timestamp": 1}
    assert call.prior_live is not None and call.prior_live.routine_name == "get_user"


def test_substitution_table_merges_column_types_and_constants(
    make_engine, write_source, source_dir, loader, data_layer, logger
) -> None:
    write_source("get_user.psql")
    data_layer.columns = [
        ColumnType("users", "id", "integer"),
        ColumnType("users", "name", "varchar(40)", character_set="utf8"),
    ]
    constants = MappingConstantsSource({"MAX_USERS": 100, "LABEL": "it's"}, name="app.constants")

    make_engine(constants=constants).run_full(source_dir)

    assert loader.calls[0].substitutions == {
        "@USERS.ID%TYPE@": "integer",
        "@USERS.NAME%TYPE@": "varchar(40) character set utf8",
        "@MAX_USERS@": "100",
        "@LABEL@": "'it''s'",
    }
    assert "Selected 2 column types for substitution" in logger.of("info")
    assert "Read 2 constants for substitution from app.constants" in logger.of("info")


def test_error_set_drives_exit_code_and_isolates_failures(
    make_engine, write_source, source_dir, loader, metadata_path
) -> None:
    write_source("a.psql")
    broken = write_source("b.psql")
    write_source("c.psql")
    loader.failing.add("b")
    metadata_path.parent.mkdir(parents=True)
    metadata_path.write_text(json.dumps({"b": {"routine_name": "b"}}))

    result = make_engine().run_full(source_dir)

    assert result.exit_code == 1
    assert result.errors.paths == [str(broken)]
    assert loader.loaded == ["a", "b", "c"]
    assert set(result.metadata) == {"a", "c"}
    assert result.states["b"] is UnitState.FAILED
    assert json.loads(metadata_path.read_text()).keys() == {"a", "c"}


def test_unit_load_failure_exception_is_recovered(make_engine, write_source, source_dir, loader, logger) -> None:
    write_source("a.psql")
    write_source("b.psql")
    loader.raising.add("a")

    result = make_engine().run_full(source_dir)

    (entry,) = result.errors
    assert entry.kind is ErrorKind.UNIT_LOAD_FAILURE
    assert entry.message == "cannot compile a"
    assert set(result.metadata) == {"b"}
    assert logger.of("warn")[-1] == "Routines in the files below are not loaded:"
    assert logger.of("listing") == [entry.path]


def test_full_run_drops_obsolete_routines_and_prunes_metadata(
    make_engine, write_source, source_dir, data_layer, metadata_path, logger
) -> None:
    write_source("kept.psql")
    data_layer.add_routine("kept")
    data_layer.add_routine("gone", routine_type="PROCEDURE")
    metadata_path.parent.mkdir(parents=True)
    metadata_path.write_text(json.dumps({"kept": {}, "gone": {}, "never_loaded": {}}))

    result = make_engine().run_full(source_dir)

    assert data_layer.dropped == ["gone"]
    assert [record.routine_name for record in result.dropped] == ["gone"]
    assert set(result.metadata) == {"kept"}
    assert "Dropping procedure gone" in logger.of("info")


def test_failed_drop_is_reported_but_not_an_error(make_engine, write_source, source_dir, data_layer, logger) -> None:
    write_source("kept.psql")
    data_layer.add_routine("stuck")
    data_layer.failing_drops.add("stuck")

    result = make_engine().run_full(source_dir)

    assert result.exit_code == 0
    assert [record.routine_name for record in result.failed_drops] == ["stuck"]
    assert "stuck" in data_layer.routines
    assert "Unable to drop function stuck" in logger.of("warn")


def test_two_full_runs_are_idempotent(make_engine, write_source, source_dir, data_layer, metadata_path) -> None:
    write_source("a.psql")
    write_source("b.psql")
    data_layer.add_routine("old")

    first = make_engine().run_full(source_dir)
    first_bytes = metadata_path.read_bytes()
    second = make_engine().run_full(source_dir)

    assert [record.routine_name for record in first.dropped] == ["old"]
    assert second.dropped == []
    assert second.metadata == first.metadata
    assert metadata_path.read_bytes() == first_bytes


@pytest.mark.parametrize("names", [("get_user", "get__user"), ("get__user", "get_user")])
def test_conflicting_units_are_all_rejected(
    make_engine, write_source, source_dir, loader, logger, names: tuple[str, str]
) -> None:
    for name in names:
        write_source(f"{name}.psql")
    write_source("list_users.psql")

    result = make_engine(naming=CamelCaseNamingStrategy()).run_full(source_dir)

    assert loader.loaded == ["list_users"]
    assert set(result.metadata) == {"list_users"}
    conflicts = result.errors.of_kind(ErrorKind.CONFLICT)
    assert sorted(Path(entry.path).stem for entry in conflicts) == ["get__user", "get_user"]
    assert result.exit_code == 1
    assert (
        "The following source files would result in wrapper methods with equal name 'getUser'" in logger.of("fail")
    )


def test_list_run_reports_missing_files_without_dropping(
    make_engine, write_source, data_layer, loader, metadata_path, tmp_path
) -> None:
    present = write_source("a.psql")
    missing = str(tmp_path / "missing.psql")
    data_layer.add_routine("other")
    metadata_path.parent.mkdir(parents=True)
    metadata_path.write_text(json.dumps({"other": {"routine_name": "other"}}))

    result = make_engine().run_list([str(present), missing])

    assert result.mode is RunMode.LIST
    assert loader.loaded == ["a"]
    assert result.errors.paths == [missing]
    assert result.errors.of_kind(ErrorKind.NOT_FOUND)[0].path == missing
    assert result.exit_code == 1
    assert data_layer.dropped == []
    assert set(result.metadata) == {"a", "other"}


def test_list_run_skips_other_extensions(make_engine, write_source, loader) -> None:
    text_file = write_source("readme.txt")

    result = make_engine().run_list([str(text_file)])

    assert loader.loaded == []
    assert result.exit_code == 0


def test_corrupt_metadata_aborts_before_loading(make_engine, write_source, source_dir, loader, data_layer, metadata_path) -> None:
    write_source("a.psql")
    data_layer.add_routine("obsolete")
    metadata_path.parent.mkdir(parents=True)
    metadata_path.write_text("{not json")

    with pytest.raises(MetadataCorruptError):
        make_engine().run_full(source_dir)

    assert loader.calls == []
    assert data_layer.dropped == []
    assert metadata_path.read_text() == "{not json"


def test_full_run_with_missing_source_directory_changes_nothing(
    make_engine, write_source, loader, data_layer, metadata_path, tmp_path
) -> None:
    write_source("get_user.psql")
    data_layer.add_routine("get_user")
    data_layer.add_routine("list_users")
    metadata_path.parent.mkdir(parents=True)
    snapshot = json.dumps({"get_user": {"routine_name": "get_user"}, "list_users": {"routine_name": "list_users"}})
    metadata_path.write_text(snapshot)

    with pytest.raises(ConfigurationError, match="typo_psql"):
        make_engine().run_full(tmp_path / "typo_psql")

    assert data_layer.calls == []
    assert data_layer.dropped == []
    assert loader.calls == []
    assert metadata_path.read_text() == snapshot


def test_duplicate_routine_names_are_all_rejected(make_engine, write_source, source_dir, loader, logger) -> None:
    first = write_source("get_user.psql", subdir="a")
    second = write_source("get_user.psql", subdir="b")
    write_source("list_users.psql")

    result = make_engine().run_full(source_dir)

    assert loader.loaded == ["list_users"]
    assert result.states == {"list_users": UnitState.LOADED}
    assert [(entry.path, entry.kind) for entry in result.errors] == [
        (str(first), ErrorKind.CONFLICT),
        (str(second), ErrorKind.CONFLICT),
    ]
    assert result.exit_code == 1
    assert "The following source files define the same routine 'get_user'" in logger.of("fail")


def test_engine_works_with_standalone_collaborators(tmp_path: Path, source_dir: Path, write_source) -> None:
    from routinesync.engine import Collaborators, EngineSettings, ReconciliationEngine
    from routinesync.metadata_store import MetadataStore

    write_source("a.psql")
    data_layer = FakeDataLayer()
    engine = ReconciliationEngine(
        settings=EngineSettings(extension=".psql", mode="public", character_set="UTF8", collation="C"),
        collaborators=Collaborators(
            column_types=data_layer,
            routine_catalog=data_layer,
            dropper=data_layer,
            mode_normalizer=data_layer,
            loader=FakeLoader(),
        ),
        store=MetadataStore(tmp_path / "meta.json"),
        logger=RecordingLogger(),
    )

    result = engine.run_full(source_dir)

    assert result.accepted_units[0].accessor_name is None
    assert data_layer.calls[:3] == ["list_column_types", "list_routines", "normalize_mode"]


def test_prune_metadata_keeps_only_known_units() -> None:
    units = [SourceUnit(path="a.psql", routine_name="a")]

    assert prune_metadata({"a": {"x": 1}, "b": {}}, units) == {"a": {"x": 1}}
