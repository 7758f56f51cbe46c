# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Naming strategies deriving wrapper accessor names from routine names."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Final

from .errors import ConfigurationError
from .imports import import_reference
from .interfaces.naming import NamingStrategy

_WORD_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"_+")


class NullNamingStrategy:
    """Strategy used when no name mangling is configured."""

    def derive_accessor_name(self, routine_name: str) -> str | None:
        return None


class CamelCaseNamingStrategy:
    """Convert ``snake_case`` routine names into ``lowerCamelCase`` accessors.

    Leading and repeated underscores are dropped, so ``abc_get_user`` and
    ``abc__get_user`` both become ``abcGetUser``; this is exactly the kind of
    collision the conflict detector is there to catch.
    """

    def derive_accessor_name(self, routine_name: str) -> str | None:
        words = [word for word in _WORD_SEPARATOR.split(routine_name) if word]
        if not words:
            return routine_name
        head, *tail = words
        return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)


class SnakeCaseNamingStrategy:
    """Use the lower-cased routine name as accessor name."""

    def derive_accessor_name(self, routine_name: str) -> str | None:
        return routine_name.lower()


BUILTIN_STRATEGIES: Final[dict[str, Callable[[], NamingStrategy]]] = {
    "camel": CamelCaseNamingStrategy,
    "snake": SnakeCaseNamingStrategy,
}


def resolve_naming_strategy(reference: str | None) -> NamingStrategy:
    """Return the naming strategy configured by ``reference``.

    Args:
        reference: Built-in strategy name, ``module:attribute`` import path, or
            ``None`` when no strategy is configured.

    Returns:
        NamingStrategy: Resolved strategy instance.

    Raises:
        ConfigurationError: If the reference cannot be resolved to a strategy.
    """

    if not reference:
        return NullNamingStrategy()
    if factory := BUILTIN_STRATEGIES.get(reference.strip().lower()):
        return factory()
    candidate = import_reference(reference, context="wrapper.naming_strategy")
    if isinstance(candidate, type):
        candidate = candidate()
    if not isinstance(candidate, NamingStrategy):
        raise ConfigurationError(
            f"wrapper.naming_strategy: '{reference}' does not provide derive_accessor_name()",
        )
    return candidate


__all__ = [
    "BUILTIN_STRATEGIES",
    "CamelCaseNamingStrategy",
    "NullNamingStrategy",
    "SnakeCaseNamingStrategy",
    "resolve_naming_strategy",
]
