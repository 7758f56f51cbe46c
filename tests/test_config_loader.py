# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for TOML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from routinesync.config import TomlConfigSource, load_settings
from routinesync.errors import ConfigurationError

VALID_CONFIG = """
[database]
name = "app"
user = "loader"
password = "${APP_DB_PASSWORD}"
schema = "app"

[loader]
metadata = "etc/routines.json"
source_directory = "lib/psql"
extension = ".psql"
mode = "app, public"
character_set = "UTF8"
collation = "C"

[constants]
module = "app.constants"

[wrapper]
naming_strategy = "camel"
""".strip()


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "routinesync.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_settings_resolves_paths_and_env(tmp_path: Path) -> None:
    path = _write(tmp_path, VALID_CONFIG)

    settings = load_settings(path, env={"APP_DB_PASSWORD": "s3cret"})

    assert settings.source == path
    assert settings.database.host == "localhost"
    assert settings.database.port == 5432
    assert settings.database.password == "s3cret"
    assert settings.database.schema_name == "app"
    assert settings.loader.metadata == tmp_path.resolve() / "etc" / "routines.json"
    assert settings.loader.source_directory == tmp_path.resolve() / "lib" / "psql"
    assert settings.constants.module == "app.constants"
    assert settings.wrapper.naming_strategy == "camel"


def test_unset_env_variable_is_left_untouched(tmp_path: Path) -> None:
    settings = load_settings(_write(tmp_path, VALID_CONFIG), env={})

    assert settings.database.password == "${APP_DB_PASSWORD}"


def test_absolute_paths_are_kept(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "meta.json"
    text = VALID_CONFIG.replace('"etc/routines.json"', f'"{target.as_posix()}"')

    settings = load_settings(_write(tmp_path, text), env={})

    assert settings.loader.metadata == target


def test_optional_sections_default(tmp_path: Path) -> None:
    text = VALID_CONFIG.split("[constants]")[0]

    settings = load_settings(_write(tmp_path, text), env={})

    assert settings.constants.module is None
    assert settings.wrapper.naming_strategy is None


def test_missing_required_setting_is_named(tmp_path: Path) -> None:
    text = VALID_CONFIG.replace('collation = "C"\n', "")

    with pytest.raises(ConfigurationError, match="missing required setting 'loader.collation'"):
        load_settings(_write(tmp_path, text), env={})


@pytest.mark.parametrize(
    ("old", "new", "key"),
    [
        ('extension = ".psql"', 'extension = "psql"', "loader.extension"),
        ('user = "loader"', 'user = "loader"\nport = 70000', "database.port"),
        ('schema = "app"', 'schema = "app"\nbogus = 1', "database.bogus"),
    ],
)
def test_invalid_settings_are_rejected(tmp_path: Path, old: str, new: str, key: str) -> None:
    text = VALID_CONFIG.replace(old, new)

    with pytest.raises(ConfigurationError, match=f"invalid setting '{key}'"):
        load_settings(_write(tmp_path, text), env={})


def test_missing_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="does not exist"):
        TomlConfigSource(tmp_path / "absent.toml").load()
    with pytest.raises(ConfigurationError, match="not valid TOML"):
        load_settings(_write(tmp_path, "[database\n"), env={})


def test_conninfo_quotes_values(tmp_path: Path) -> None:
    settings = load_settings(_write(tmp_path, VALID_CONFIG), env={"APP_DB_PASSWORD": "it's"})

    assert settings.database.conninfo() == (
        "host='localhost' port='5432' dbname='app' user='loader' password='it\\'s'"
    )
