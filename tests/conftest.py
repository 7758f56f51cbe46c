# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from routinesync.console import get_console_manager
from routinesync.engine import Collaborators, EngineSettings, ReconciliationEngine
from routinesync.interfaces import ConstantsSource, NamingStrategy
from routinesync.metadata_store import MetadataStore

from .fakes import FakeDataLayer, FakeLoader, RecordingLogger

EngineFactory = Callable[..., ReconciliationEngine]


@pytest.fixture(autouse=True)
def _fresh_consoles() -> None:
    """Drop cached Rich consoles so each test writes to its own stdout."""

    get_console_manager().clear()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def data_layer() -> FakeDataLayer:
    return FakeDataLayer()


@pytest.fixture
def loader(data_layer: FakeDataLayer) -> FakeLoader:
    return FakeLoader(data_layer=data_layer)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    root = tmp_path / "psql"
    root.mkdir()
    return root


@pytest.fixture
def metadata_path(tmp_path: Path) -> Path:
    return tmp_path / "etc" / "routines.json"


@pytest.fixture
def write_source(source_dir: Path) -> Callable[..., Path]:
    """Return a helper creating routine source files below ``source_dir``."""

    def _write(name: str, body: str = "", *, subdir: str | None = None) -> Path:
        directory = source_dir / subdir if subdir else source_dir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(body or f"create function {path.stem}() returns int as $$ select 1 $$ language sql;\n")
        return path

    return _write


@pytest.fixture
def make_engine(
    data_layer: FakeDataLayer,
    loader: FakeLoader,
    logger: RecordingLogger,
    metadata_path: Path,
) -> EngineFactory:
    """Return a factory building engines wired to the in-memory fakes."""

    def _make(
        *,
        naming: NamingStrategy | None = None,
        constants: ConstantsSource | None = None,
        extension: str = ".psql",
    ) -> ReconciliationEngine:
        return ReconciliationEngine(
            settings=EngineSettings(extension=extension, mode=" App, Public ", character_set="UTF8", collation="C"),
            collaborators=Collaborators.from_data_layer(data_layer, loader, constants=constants, naming=naming),
            store=MetadataStore(metadata_path),
            logger=logger,
        )

    return _make
