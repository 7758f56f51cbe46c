# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load routinesync settings from a TOML document."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import Settings

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(\w+)|\$\{([^}]+)\}")
_RELATIVE_PATH_KEYS: Final[tuple[tuple[str, str], ...]] = (
    ("loader", "metadata"),
    ("loader", "source_directory"),
)


class TomlConfigSource:
    """Read a configuration document from a TOML file."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        self.path = path
        self._env = env if env is not None else os.environ

    def load(self) -> dict[str, Any]:
        """Return the parsed document with environment variables expanded.

        Returns:
            dict[str, Any]: Raw configuration tables.

        Raises:
            ConfigurationError: If the file is missing or is not valid TOML.
        """

        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Configuration file {self.path} does not exist") from exc
        except OSError as exc:
            raise ConfigurationError(f"Unable to read configuration file {self.path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Configuration file {self.path} is not valid TOML: {exc}") from exc
        return _expand_env(data, self._env)

    def describe(self) -> str:
        return f"TOML configuration at {self.path}"


def load_settings(path: Path, *, env: Mapping[str, str] | None = None) -> Settings:
    """Load and validate the settings stored at ``path``.

    Relative paths in the ``loader`` table are resolved against the directory
    holding the configuration file.

    Args:
        path: Location of the TOML configuration file.
        env: Optional environment used for ``$VAR`` expansion.

    Returns:
        Settings: Validated configuration.

    Raises:
        ConfigurationError: If a required setting is missing or invalid.
    """

    document = TomlConfigSource(path, env=env).load()
    _resolve_relative_paths(document, path.resolve().parent)
    try:
        settings = Settings.model_validate(document)
    except ValidationError as exc:
        raise ConfigurationError(_describe_validation_error(path, exc)) from exc
    return settings.model_copy(update={"source": path})


def _resolve_relative_paths(document: dict[str, Any], base_dir: Path) -> None:
    for section, key in _RELATIVE_PATH_KEYS:
        table = document.get(section)
        if not isinstance(table, dict):
            continue
        value = table.get(key)
        if isinstance(value, str) and value:
            candidate = Path(value).expanduser()
            table[key] = candidate if candidate.is_absolute() else base_dir / candidate


def _describe_validation_error(path: Path, exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        if error.get("type") == "missing":
            problems.append(f"missing required setting '{location}'")
        else:
            problems.append(f"invalid setting '{location}': {error.get('msg')}")
    return f"Configuration file {path}: " + "; ".join(problems)


def _expand_env(node: Any, env: Mapping[str, str]) -> Any:
    """Substitute ``$NAME`` and ``${NAME}`` in every string of a parsed document.

    Unset variables are left as written.
    """

    match node:
        case str():
            return _ENV_VAR_PATTERN.sub(lambda found: env.get(found[1] or found[2], found[0]), node)
        case dict():
            return {key: _expand_env(item, env) for key, item in node.items()}
        case list():
            return [_expand_env(item, env) for item in node]
        case _:
            return node


__all__ = ["TomlConfigSource", "load_settings"]
