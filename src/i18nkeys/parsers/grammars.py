# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve packaged Tree-sitter grammars used by the built-in parsers."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from threading import Lock
from types import ModuleType
from typing import Final

from tree_sitter import Language as TSLanguage
from tree_sitter import Parser as TSParser

from ..cache.in_memory import memoize
from ..errors import GrammarUnavailableError

LOGGER = logging.getLogger(__name__)

JAVASCRIPT: Final[str] = "javascript"
TYPESCRIPT: Final[str] = "typescript"
TSX: Final[str] = "tsx"
HTML: Final[str] = "html"


@dataclass(frozen=True)
class GrammarSource:
    """Describe which packaged module exposes a grammar and through which factory."""

    module: str
    factory: str = "language"


_GRAMMAR_SOURCES: Final[dict[str, GrammarSource]] = {
    JAVASCRIPT: GrammarSource(module="tree_sitter_javascript"),
    TYPESCRIPT: GrammarSource(module="tree_sitter_typescript", factory="language_typescript"),
    TSX: GrammarSource(module="tree_sitter_typescript", factory="language_tsx"),
    HTML: GrammarSource(module="tree_sitter_html"),
}

_LANGUAGE_CACHE: dict[str, TSLanguage] = {}
_LANGUAGE_CACHE_LOCK = Lock()


def ensure_language(grammar_name: str) -> TSLanguage | None:
    """Resolve a :class:`Language` for ``grammar_name`` when possible.

    Args:
        grammar_name: Grammar identifier (``"javascript"``, ``"typescript"``,
            ``"tsx"`` or ``"html"``).

    Returns:
        Language | None: Loaded grammar, or ``None`` when its module is missing.
    """

    with _LANGUAGE_CACHE_LOCK:
        cached = _LANGUAGE_CACHE.get(grammar_name)
        if cached is not None:
            return cached

    source = _GRAMMAR_SOURCES.get(grammar_name)
    if source is None:
        return None
    module = _import_language_module(source.module)
    if module is None:
        return None
    language = _language_from_module(module, source.factory)
    if language is None:
        return None
    with _LANGUAGE_CACHE_LOCK:
        _LANGUAGE_CACHE.setdefault(grammar_name, language)
        return _LANGUAGE_CACHE[grammar_name]


@memoize(maxsize=None)
def create_parser(grammar_name: str) -> TSParser:
    """Return a parser bound to ``grammar_name``.

    Args:
        grammar_name: Grammar identifier understood by :func:`ensure_language`.

    Returns:
        TSParser: Parser instance shared by every caller in the process.

    Raises:
        GrammarUnavailableError: If the grammar module is not installed.
    """

    language = ensure_language(grammar_name)
    if language is None:
        raise GrammarUnavailableError(f"Tree-sitter grammar '{grammar_name}' is not installed")
    LOGGER.debug("created tree-sitter parser for %s", grammar_name)
    return TSParser(language)


def _import_language_module(module_name: str) -> ModuleType | None:
    """Import a packaged Tree-sitter language module when available."""

    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError:
        return None


def _language_from_module(module: ModuleType, factory_name: str) -> TSLanguage | None:
    """Instantiate a ``Language`` object from a packaged module factory."""

    factory = getattr(module, factory_name, None)
    if not callable(factory):
        return None
    return TSLanguage(factory())


__all__ = ["HTML", "JAVASCRIPT", "TSX", "TYPESCRIPT", "create_parser", "ensure_language"]
