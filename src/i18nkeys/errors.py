# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while collecting localisation keys."""

from __future__ import annotations


class I18nKeysError(Exception):
    """Base class for errors raised by the key collection pipeline."""


class ConfigError(I18nKeysError):
    """Raised when project configuration input is invalid."""


class ParseError(I18nKeysError):
    """Raised when a built-in parser cannot turn source text into an AST."""


class GrammarUnavailableError(ParseError):
    """Raised when a Tree-sitter grammar module is not installed."""


__all__ = ("ConfigError", "GrammarUnavailableError", "I18nKeysError", "ParseError")
