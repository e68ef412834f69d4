# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Named-strategy registry resolving parser identifiers to parsers.

Parsers contributed by other distributions are discovered through the
``i18nkeys.parsers`` entry-point group. Entries that fail to import are
skipped silently so a broken plugin never prevents key collection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from functools import partial
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from threading import Lock
from typing import Final, TypeAlias, cast

from .base import (
    AstPayload,
    ParseForESLintFunction,
    ParseFunction,
    ParserOptions,
    ResolvedParser,
    coerce_parse_result,
)
from .builtin import VUE_PARSER, VueParser, builtin_parsers

LOGGER = logging.getLogger(__name__)

DEFAULT_PARSER: Final[str] = VUE_PARSER
PARSER_PLUGIN_GROUP: Final[str] = "i18nkeys.parsers"

_EntryPointSource: TypeAlias = EntryPoints | Mapping[str, Sequence[EntryPoint]]


class ParserRegistry:
    """Map parser identifiers to parser implementations.

    Args:
        parsers: Additional parsers keyed by name; they shadow built-ins of the
            same name.
        default: Name used when no identifier is supplied or lookup fails.
        discover_plugins: Whether unknown names trigger entry-point discovery.
    """

    def __init__(
        self,
        parsers: Mapping[str, object] | None = None,
        *,
        default: str = DEFAULT_PARSER,
        discover_plugins: bool = True,
    ) -> None:
        self._candidates: dict[str, object] = builtin_parsers()
        self._candidates.update(parsers or {})
        self._default = default
        self._discover_plugins = discover_plugins
        self._plugins_loaded = False
        self._lock = Lock()

    @property
    def default(self) -> str:
        """Return the name of the fallback parser."""

        return self._default

    def register(self, name: str, parser: object) -> None:
        """Register ``parser`` under ``name``, replacing any previous entry."""

        with self._lock:
            self._candidates[name] = parser

    def names(self) -> tuple[str, ...]:
        """Return registered parser names in sorted order."""

        self._load_plugins()
        with self._lock:
            return tuple(sorted(self._candidates))

    def lookup(self, name: str) -> ResolvedParser | None:
        """Return the parser registered under ``name`` or ``None``.

        Args:
            name: Parser identifier such as ``"espree"``.

        Returns:
            ResolvedParser | None: Normalised parser, ``None`` when the name is
            unknown or the registered object exposes no usable entry point.
        """

        with self._lock:
            candidate = self._candidates.get(name)
        if candidate is None and self._discover_plugins:
            self._load_plugins()
            with self._lock:
                candidate = self._candidates.get(name)
        if candidate is None:
            return None
        return normalise_parser(name, candidate)

    def resolve(self, name: str | None = None) -> ResolvedParser:
        """Return the parser for ``name``, falling back to the default parser.

        Args:
            name: Optional parser identifier.

        Returns:
            ResolvedParser: Parser able to handle the request.
        """

        if name:
            resolved = self.lookup(name)
            if resolved is not None:
                return resolved
            LOGGER.debug("parser %s unavailable; using %s", name, self._default)
        resolved = self.lookup(self._default)
        if resolved is not None:
            return resolved
        return cast(ResolvedParser, normalise_parser(VUE_PARSER, VueParser()))

    def _load_plugins(self) -> None:
        if not self._discover_plugins:
            return
        with self._lock:
            if self._plugins_loaded:
                return
            self._plugins_loaded = True
        for name, parser in discover_plugin_parsers():
            with self._lock:
                self._candidates.setdefault(name, parser)


def normalise_parser(name: str, candidate: object) -> ResolvedParser | None:
    """Adapt ``candidate`` to the :class:`ResolvedParser` calling convention.

    Args:
        name: Registry name of the candidate.
        candidate: Object exposing ``parse_for_eslint`` and/or ``parse``, or a
            bare callable behaving like ``parse``. Classes are rejected.

    Returns:
        ResolvedParser | None: Normalised parser, ``None`` when ``candidate``
        offers no callable entry point.
    """

    if isinstance(candidate, type):
        return None
    parse_for_eslint = getattr(candidate, "parse_for_eslint", None)
    parse = getattr(candidate, "parse", None)
    if callable(parse_for_eslint):
        eslint_fn = cast(ParseForESLintFunction, parse_for_eslint)
        parse_fn = parse if callable(parse) else partial(_parse_via_eslint, eslint_fn)
        return ResolvedParser(name=name, parse=cast(ParseFunction, parse_fn), parse_for_eslint=eslint_fn)
    if callable(parse):
        return ResolvedParser(name=name, parse=cast(ParseFunction, parse))
    if callable(candidate):
        return ResolvedParser(name=name, parse=cast(ParseFunction, candidate))
    return None


def _parse_via_eslint(parse_for_eslint: ParseForESLintFunction, text: str, options: ParserOptions) -> AstPayload:
    return coerce_parse_result(parse_for_eslint(text, options)).ast


def _select_entry_points(entries: _EntryPointSource, group: str) -> Iterable[EntryPoint]:
    if isinstance(entries, Mapping):
        return entries.get(group, ())
    if hasattr(entries, "select"):
        return entries.select(group=group)
    return ()


def discover_plugin_parsers(group: str = PARSER_PLUGIN_GROUP) -> tuple[tuple[str, object], ...]:
    """Return ``(name, parser)`` pairs exposed by the entry-point ``group``.

    Returns:
        tuple[tuple[str, object], ...]: Loaded parsers. Entries that fail to
        import are skipped silently.
    """

    entries_raw = metadata.entry_points()
    selected = _select_entry_points(cast(_EntryPointSource, entries_raw), group)
    loaded: list[tuple[str, object]] = []
    for entry in selected:
        try:
            parser = entry.load()
        except Exception as exc:  # noqa: BLE001 - broken plugins are skipped
            LOGGER.debug("skipping parser plugin %s: %s", entry.name, exc)
            continue
        loaded.append((entry.name, parser))
    return tuple(loaded)


__all__ = [
    "DEFAULT_PARSER",
    "PARSER_PLUGIN_GROUP",
    "ParserRegistry",
    "discover_plugin_parsers",
    "normalise_parser",
]
