# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve packaged Tree-sitter grammars and build parsers for them."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from threading import Lock
from types import ModuleType
from typing import Final, cast

from tree_sitter import Language as TSLanguage
from tree_sitter import Parser as TSParser

GO_GRAMMAR: Final[str] = "go"
_MODULE_PREFIX: Final[str] = "tree_sitter_"

_LANGUAGE_CACHE: dict[str, TSLanguage] = {}
_LANGUAGE_CACHE_LOCK = Lock()


def _import_language_module(module_name: str) -> ModuleType | None:
    """Import a packaged Tree-sitter language module when available."""

    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError:
        return None


def _language_from_module(module: ModuleType) -> TSLanguage | None:
    """Instantiate a ``Language`` object from a packaged module factory."""

    factory = getattr(module, "language", None)
    if not callable(factory):
        return None
    return TSLanguage(factory())


def ensure_language(grammar_name: str) -> TSLanguage:
    """Return the :class:`Language` for ``grammar_name``.

    Languages are cached for the lifetime of the process.

    Args:
        grammar_name: Canonical Tree-sitter grammar name (e.g., ``"go"``).

    Returns:
        Language: Loaded grammar.

    Raises:
        RuntimeError: If the grammar package is not installed or unusable.
    """

    with _LANGUAGE_CACHE_LOCK:
        cached = _LANGUAGE_CACHE.get(grammar_name)
        if cached is not None:
            return cached

    module_name = f"{_MODULE_PREFIX}{grammar_name.replace('-', '_')}"
    module = _import_language_module(module_name)
    if module is None:
        raise RuntimeError(
            f"Tree-sitter grammar '{grammar_name}' is unavailable; install the "
            f"'{module_name.replace('_', '-')}' package",
        )
    language = _language_from_module(module)
    if language is None:
        raise RuntimeError(f"{module_name} does not expose a language() factory")
    with _LANGUAGE_CACHE_LOCK:
        _LANGUAGE_CACHE.setdefault(grammar_name, language)
        return _LANGUAGE_CACHE[grammar_name]


def build_parser(grammar_name: str = GO_GRAMMAR) -> TSParser:
    """Return a new parser configured for ``grammar_name``.

    Parsers are not thread-safe, so callers should build one per parse or per
    thread rather than sharing a single instance.
    """

    language = ensure_language(grammar_name)
    parser = TSParser()
    if hasattr(parser, "set_language"):
        setter = cast(Callable[[TSLanguage], None], getattr(parser, "set_language"))
        setter(language)
    else:
        setattr(parser, "language", language)
    return parser


__all__ = ["GO_GRAMMAR", "build_parser", "ensure_language"]
