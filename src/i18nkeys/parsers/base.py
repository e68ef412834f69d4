# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser calling conventions shared by built-in and plugin parsers."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

from ..syntax.nodes import Node

ParserOptions: TypeAlias = Mapping[str, object]
AstPayload: TypeAlias = Node | Mapping[str, object]
ParseFunction: TypeAlias = Callable[[str, ParserOptions], AstPayload]


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of a ``parse_for_eslint`` call.

    Attributes:
        ast: Root node, or an ESTree-shaped mapping produced by a plugin parser.
        visitor_keys: Optional child-field map for non-standard node kinds.
    """

    ast: AstPayload
    visitor_keys: Mapping[str, Sequence[str]] | None = None


ParseForESLintFunction: TypeAlias = Callable[[str, ParserOptions], "ParseResult | Mapping[str, object]"]


@runtime_checkable
class SupportsParse(Protocol):
    """Parser exposing only a ``parse`` entry point returning the AST."""

    def parse(self, text: str, options: ParserOptions) -> AstPayload:
        """Return the AST for ``text``."""


@runtime_checkable
class SupportsParseForESLint(Protocol):
    """Parser exposing ``parse_for_eslint`` returning the AST and visitor keys."""

    def parse_for_eslint(self, text: str, options: ParserOptions) -> ParseResult | Mapping[str, object]:
        """Return the AST and visitor keys for ``text``."""


@dataclass(frozen=True, slots=True)
class ResolvedParser:
    """Parser normalised to a uniform calling convention.

    Attributes:
        name: Registry name the parser was resolved from.
        parse: Callable returning only the AST.
        parse_for_eslint: Preferred callable returning the AST plus visitor keys,
            ``None`` when the parser does not provide one.
    """

    name: str
    parse: ParseFunction
    parse_for_eslint: ParseForESLintFunction | None = None

    def run(self, text: str, options: ParserOptions) -> ParseResult:
        """Parse ``text`` preferring ``parse_for_eslint`` when available."""

        if self.parse_for_eslint is None:
            return ParseResult(ast=self.parse(text, options))
        return coerce_parse_result(self.parse_for_eslint(text, options))


def coerce_parse_result(result: ParseResult | Mapping[str, object]) -> ParseResult:
    """Accept a :class:`ParseResult` or an ``{"ast", "visitorKeys"}`` mapping.

    Raises:
        TypeError: If ``result`` has neither shape.
    """

    if isinstance(result, ParseResult):
        return result
    if isinstance(result, Mapping) and "ast" in result:
        visitor_keys = result.get("visitorKeys", result.get("visitor_keys"))
        return ParseResult(
            ast=result["ast"],  # type: ignore[arg-type]
            visitor_keys=visitor_keys if isinstance(visitor_keys, Mapping) else None,
        )
    raise TypeError(f"Unsupported parse result of type {type(result).__name__}")


__all__ = [
    "AstPayload",
    "ParseForESLintFunction",
    "ParseFunction",
    "ParseResult",
    "ParserOptions",
    "ResolvedParser",
    "SupportsParse",
    "SupportsParseForESLint",
    "coerce_parse_result",
]
