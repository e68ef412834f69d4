# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in parser strategies backed by Tree-sitter grammars."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePath
from typing import Final

from ..syntax.nodes import VISITOR_KEYS, Program
from .base import ParseResult, ParserOptions
from .grammars import TSX, TYPESCRIPT
from .script import grammar_for_path, parse_script
from .sfc import parse_sfc

VUE_PARSER: Final[str] = "vue-eslint-parser"
ESPREE_PARSER: Final[str] = "espree"
TYPESCRIPT_PARSER: Final[str] = "@typescript-eslint/parser"

SFC_SUFFIX: Final[str] = ".vue"
TYPESCRIPT_SUFFIXES: Final[frozenset[str]] = frozenset({".ts", ".mts", ".cts", ".tsx"})
FILE_PATH_OPTION: Final[str] = "file_path"
SCRIPT_PARSER_OPTION: Final[str] = "parser"


def _file_path(options: ParserOptions) -> str | None:
    value = options.get(FILE_PATH_OPTION)
    return str(value) if value else None


class ScriptParser:
    """Parse plain JavaScript or TypeScript files.

    ``grammar=None`` picks the grammar from the ``file_path`` option suffix.
    """

    def __init__(self, grammar: str | None = None) -> None:
        self._grammar = grammar

    def grammar_for(self, options: ParserOptions) -> str:
        """Return the grammar used for a file parsed with ``options``."""

        file_path = _file_path(options)
        if self._grammar == TYPESCRIPT and file_path and PurePath(file_path).suffix.lower() == ".tsx":
            return TSX
        return self._grammar or grammar_for_path(file_path)

    def parse_for_eslint(self, text: str, options: ParserOptions) -> ParseResult:
        """Return the parsed program together with the node visitor keys."""

        return ParseResult(ast=self.parse(text, options), visitor_keys=VISITOR_KEYS)

    def parse(self, text: str, options: ParserOptions) -> Program:
        """Parse a whole script file.

        Raises:
            ParseError: If the source has syntax errors.
        """

        return parse_script(text, grammar=self.grammar_for(options))


class VueParser:
    """Parse ``.vue`` components, delegating other files to a script parser.

    The ``parser`` option names the script parser used inside components and
    for non-component files, the way vue-eslint-parser reads ``parserOptions.parser``.
    A per-language mapping leaves component grammars to each block's ``lang``.
    """

    _SCRIPT_PARSERS: Final[dict[str, ScriptParser]] = {
        ESPREE_PARSER: ScriptParser(),
        TYPESCRIPT_PARSER: ScriptParser(TYPESCRIPT),
    }

    def parse_for_eslint(self, text: str, options: ParserOptions) -> ParseResult:
        """Return :meth:`parse` output with the node visitor keys."""

        return ParseResult(ast=self.parse(text, options), visitor_keys=VISITOR_KEYS)

    def parse(self, text: str, options: ParserOptions) -> Program:
        """Parse ``text`` as a component, or as a script for other suffixes.

        Args:
            text: File contents.
            options: Parser options; ``file_path`` selects the mode and
                ``parser`` the script parser.

        Returns:
            Program: Parsed tree, with ``template_body`` set for components.

        Raises:
            ParseError: If a script block or script file has syntax errors.
        """

        file_path = _file_path(options)
        suffix = PurePath(file_path).suffix.lower() if file_path else ""
        if suffix != SFC_SUFFIX:
            return self._script_parser(script_parser_name(options, suffix)).parse(text, options)
        explicit = options.get(SCRIPT_PARSER_OPTION)
        grammar = None
        if isinstance(explicit, str) and explicit in self._SCRIPT_PARSERS:
            grammar = self._SCRIPT_PARSERS[explicit].grammar_for(options)
        return parse_sfc(text, script_grammar=grammar)

    def _script_parser(self, name: str | None) -> ScriptParser:
        if name is not None and name in self._SCRIPT_PARSERS:
            return self._SCRIPT_PARSERS[name]
        return self._SCRIPT_PARSERS[ESPREE_PARSER]


def script_parser_name(options: ParserOptions, suffix: str) -> str | None:
    """Return the script parser named by the ``parser`` option for ``suffix``.

    The option is either a parser name or a mapping keyed by script language
    (``{"js": "espree", "ts": "@typescript-eslint/parser"}``). Mapping lookups
    try the bare suffix first, then ``ts`` or ``js``.

    Args:
        options: Parser options.
        suffix: Lower-cased file suffix including the dot.

    Returns:
        str | None: Parser name, or ``None`` when none applies.
    """

    value = options.get(SCRIPT_PARSER_OPTION)
    if isinstance(value, Mapping):
        language = "ts" if suffix in TYPESCRIPT_SUFFIXES else "js"
        value = value.get(suffix.lstrip("."), value.get(language))
    return value if isinstance(value, str) else None


def builtin_parsers() -> dict[str, object]:
    """Return fresh instances of every built-in parser keyed by registry name."""

    return {
        VUE_PARSER: VueParser(),
        ESPREE_PARSER: ScriptParser(),
        TYPESCRIPT_PARSER: ScriptParser(TYPESCRIPT),
    }


__all__ = [
    "ESPREE_PARSER",
    "FILE_PATH_OPTION",
    "SCRIPT_PARSER_OPTION",
    "ScriptParser",
    "TYPESCRIPT_PARSER",
    "VUE_PARSER",
    "VueParser",
    "builtin_parsers",
    "script_parser_name",
]
