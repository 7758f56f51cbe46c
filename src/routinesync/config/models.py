# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for routinesync."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DatabaseSettings(BaseModel):
    """Connection parameters of the target database."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    name: str = Field(min_length=1)
    user: str = Field(min_length=1)
    password: str = ""
    schema_name: str | None = Field(default=None, alias="schema")

    def conninfo(self) -> str:
        """Return a libpq connection string for these settings.

        Returns:
            str: Space separated ``key=value`` pairs with quoted values.
        """

        parts = {
            "host": self.host,
            "port": str(self.port),
            "dbname": self.name,
            "user": self.user,
            "password": self.password,
        }
        return " ".join(f"{key}={_quote_conninfo(value)}" for key, value in parts.items() if value)


class LoaderSettings(BaseModel):
    """Settings controlling how routine sources are found and loaded."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    metadata: Path
    source_directory: Path
    extension: str
    mode: str
    character_set: str = Field(min_length=1)
    collation: str = Field(min_length=1)

    @field_validator("extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if len(value) < 2 or not value.startswith(".") or "/" in value:
            raise ValueError("extension must look like '.psql'")
        return value


class ConstantsSettings(BaseModel):
    """Where named constants for ``@NAME@`` placeholders are read from."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    module: str | None = None


class WrapperSettings(BaseModel):
    """Settings for the generated routine wrapper."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    naming_strategy: str | None = None


class Settings(BaseModel):
    """Complete, validated routinesync configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    database: DatabaseSettings
    loader: LoaderSettings
    constants: ConstantsSettings = Field(default_factory=ConstantsSettings)
    wrapper: WrapperSettings = Field(default_factory=WrapperSettings)
    source: Path | None = Field(default=None, exclude=True)


def _quote_conninfo(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


__all__ = [
    "ConstantsSettings",
    "DatabaseSettings",
    "LoaderSettings",
    "Settings",
    "WrapperSettings",
]
