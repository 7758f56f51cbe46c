# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for resolving user-supplied ``module:attribute`` references."""

from __future__ import annotations

import importlib
from types import ModuleType

from .errors import ConfigurationError


def import_reference(reference: str, *, context: str) -> object:
    """Import the module or attribute named by ``reference``.

    ``reference`` is either a dotted module path (``pkg.module``) or a module
    path followed by an attribute path (``pkg.module:Class.attr``).

    Args:
        reference: Import reference supplied through configuration.
        context: Configuration key used in error messages.

    Returns:
        object: The imported module or attribute.

    Raises:
        ConfigurationError: If the module cannot be imported or lacks the attribute.
    """

    module_path, _, attribute_path = reference.strip().partition(":")
    if not module_path:
        raise ConfigurationError(f"{context}: '{reference}' is not a valid import path")
    try:
        target: ModuleType | object = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"{context}: unable to import module '{module_path}'") from exc
    for attribute in filter(None, attribute_path.split(".")):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise ConfigurationError(
                f"{context}: '{module_path}' has no attribute '{attribute_path}'",
            ) from exc
    return target


__all__ = ["import_reference"]
