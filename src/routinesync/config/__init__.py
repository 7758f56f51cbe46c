# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loading helpers."""

from __future__ import annotations

from .loader import TomlConfigSource, load_settings
from .models import ConstantsSettings, DatabaseSettings, LoaderSettings, Settings, WrapperSettings

__all__ = [
    "ConstantsSettings",
    "DatabaseSettings",
    "LoaderSettings",
    "Settings",
    "TomlConfigSource",
    "WrapperSettings",
    "load_settings",
]
