# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser strategies and the registry resolving them by name."""

from __future__ import annotations

from .base import ParseResult, ResolvedParser, coerce_parse_result
from .builtin import ESPREE_PARSER, TYPESCRIPT_PARSER, VUE_PARSER, ScriptParser, VueParser, builtin_parsers
from .registry import DEFAULT_PARSER, PARSER_PLUGIN_GROUP, ParserRegistry, normalise_parser

__all__ = [
    "DEFAULT_PARSER",
    "ESPREE_PARSER",
    "PARSER_PLUGIN_GROUP",
    "ParseResult",
    "ParserRegistry",
    "ResolvedParser",
    "ScriptParser",
    "TYPESCRIPT_PARSER",
    "VUE_PARSER",
    "VueParser",
    "builtin_parsers",
    "coerce_parse_result",
    "normalise_parser",
]
