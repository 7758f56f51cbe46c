# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Durable storage of the per-routine metadata snapshot."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import TypeAdapter, ValidationError

from .errors import MetadataCorruptError, PersistenceFailureError
from .models import MetadataSnapshot

DEFAULT_FILE_MODE: Final[int] = 0o644
_SNAPSHOT_ADAPTER: Final[TypeAdapter[dict[str, dict[str, Any]]]] = TypeAdapter(dict[str, dict[str, Any]])


def serialize_snapshot(snapshot: Mapping[str, Mapping[str, Any]]) -> str:
    """Return the canonical JSON text for ``snapshot``.

    Keys are sorted at every level so that unchanged snapshots produce
    identical files.

    Args:
        snapshot: Metadata keyed by routine name.

    Returns:
        str: Indented JSON document terminated by a newline.

    Raises:
        TypeError: If a record holds a value JSON cannot represent.
        ValueError: If a record holds ``NaN`` or an infinite float.
    """

    return json.dumps(snapshot, indent=4, sort_keys=True, ensure_ascii=False, allow_nan=False) + "\n"


def two_phase_write(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` through a temporary file and an atomic replace.

    The temporary file lives in the target directory so that ``os.replace``
    stays on one filesystem. Until the replace succeeds the previous content of
    ``path`` is untouched; on any failure the temporary file is removed.

    Args:
        path: Destination file.
        text: Complete new content.

    Raises:
        OSError: If writing, syncing or replacing fails.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = DEFAULT_FILE_MODE

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="\n",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        temporary = Path(handle.name)
        try:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        except BaseException:
            handle.close()
            temporary.unlink(missing_ok=True)
            raise
    try:
        os.chmod(temporary, mode)
        os.replace(temporary, path)
    except BaseException:
        temporary.unlink(missing_ok=True)
        raise


class MetadataStore:
    """Load and persist the metadata snapshot kept between runs."""

    def __init__(self, path: Path) -> None:
        """Bind the store to the metadata file at ``path``.

        Args:
            path: Location of the JSON metadata file.
        """

        self.path = path

    def load(self) -> MetadataSnapshot:
        """Return the previously persisted snapshot.

        Returns:
            MetadataSnapshot: Stored snapshot, or an empty one when the file
            does not exist yet.

        Raises:
            MetadataCorruptError: If the file cannot be read or is not a JSON
                object mapping routine names to JSON objects.
        """

        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise MetadataCorruptError(self.path, str(exc)) from exc
        try:
            return _SNAPSHOT_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            raise MetadataCorruptError(self.path, _summarise(exc)) from exc

    def save(self, snapshot: Mapping[str, Mapping[str, Any]]) -> None:
        """Persist ``snapshot`` replacing the previous file atomically.

        Args:
            snapshot: Metadata keyed by routine name.

        Raises:
            MetadataCorruptError: If the snapshot cannot be serialized.
            PersistenceFailureError: If the file cannot be written or replaced.
        """

        try:
            text = serialize_snapshot(snapshot)
        except (TypeError, ValueError) as exc:
            raise MetadataCorruptError(self.path, f"cannot serialize snapshot: {exc}") from exc
        try:
            two_phase_write(self.path, text)
        except OSError as exc:
            raise PersistenceFailureError(self.path, str(exc)) from exc


def _summarise(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{first.get('msg', 'invalid content')} at {location}"


__all__ = ["MetadataStore", "serialize_snapshot", "two_phase_write"]
