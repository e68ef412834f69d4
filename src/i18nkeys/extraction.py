# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Collect translation keys referenced by a parsed source file.

Three shapes contribute keys:

* calls to ``t``, ``$t``, ``tc`` or ``$tc`` (bare or as a member) whose first
  argument is a literal,
* ``v-t`` directives whose value is a literal expression,
* plain ``path`` attributes on ``<i18n>`` / ``<i18n-t>`` elements.

Literal values that are falsy in JavaScript (``""``, ``0``, ``false``,
``null``) never produce a key.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Final

from .syntax.estree import normalise_visitor_keys
from .syntax.nodes import (
    CallExpression,
    Identifier,
    Literal,
    LiteralValue,
    MemberExpression,
    Node,
    Program,
    VAttribute,
    VDirectiveKey,
    VElement,
    VExpressionContainer,
    VIdentifier,
    VLiteral,
)
from .syntax.traverse import merge_visitor_keys, traverse_nodes

LOGGER = logging.getLogger(__name__)

TRANSLATOR_CALL_NAMES: Final[frozenset[str]] = frozenset({"t", "$t", "tc", "$tc"})
TRANSLATION_DIRECTIVE: Final[str] = "t"
PATH_ATTRIBUTE: Final[str] = "path"
TRANSLATION_ELEMENTS: Final[frozenset[str]] = frozenset({"i18n", "i18n-t"})


def collect_keys_from_ast(program: Node, visitor_keys: Mapping[str, Sequence[str]] | None = None) -> list[str]:
    """Return the distinct keys referenced by ``program``.

    The template sub-tree is walked first with the default visitor keys, then
    the script tree with ``visitor_keys`` merged over the defaults.

    Args:
        program: Root node, usually a :class:`~i18nkeys.syntax.nodes.Program`.
        visitor_keys: Optional child-field map supplied by the parser, either
            in snake_case or ESTree camelCase.

    Returns:
        list[str]: Keys in first-seen order.
    """

    collector = _KeyCollector()
    if isinstance(program, Program) and program.template_body is not None:
        traverse_nodes(program.template_body, collector)
    traverse_nodes(program, collector, visitor_keys=merge_visitor_keys(normalise_visitor_keys(visitor_keys)))
    return list(collector.keys)


class _KeyCollector:
    """Visitor accumulating keys; dispatch is keyed on the node kind tag."""

    def __init__(self) -> None:
        self.keys: dict[str, None] = {}
        self._handlers: dict[str, Callable[[Node], None]] = {
            "CallExpression": self._call_expression,
            "VAttribute": self._attribute,
        }

    def enter_node(self, node: Node) -> None:
        handler = self._handlers.get(node.type)
        if handler is not None:
            handler(node)

    def leave_node(self, node: Node) -> None:
        del node

    def _add(self, key: str, source: str) -> None:
        if key not in self.keys:
            LOGGER.debug("found key %r via %s", key, source)
        self.keys.setdefault(key, None)

    def _call_expression(self, node: Node) -> None:
        if not isinstance(node, CallExpression):
            return
        name = callee_name(node.callee)
        if name not in TRANSLATOR_CALL_NAMES or not node.arguments:
            return
        first = node.arguments[0]
        if not isinstance(first, Literal) or not js_truthy(first.value):
            return
        self._add(js_string(first.value), f"{name}()")

    def _attribute(self, node: Node) -> None:
        if not isinstance(node, VAttribute):
            return
        if node.directive:
            self._directive(node)
        else:
            self._path_attribute(node)

    def _directive(self, node: VAttribute) -> None:
        key = node.key
        if not isinstance(key, VDirectiveKey) or key.name.name != TRANSLATION_DIRECTIVE:
            return
        container = node.value
        if not isinstance(container, VExpressionContainer):
            return
        expression = container.expression
        if not isinstance(expression, Literal) or not js_truthy(expression.value):
            return
        self._add(js_string(expression.value), "v-t")

    def _path_attribute(self, node: VAttribute) -> None:
        key = node.key
        if not isinstance(key, VIdentifier) or key.name != PATH_ATTRIBUTE:
            return
        if enclosing_element_name(node) not in TRANSLATION_ELEMENTS:
            return
        value = node.value
        if isinstance(value, VLiteral) and value.value:
            self._add(value.value, "path attribute")


def callee_name(callee: Node) -> str | None:
    """Return the called name for ``t(...)`` or ``obj.t(...)`` shaped callees."""

    if isinstance(callee, MemberExpression):
        return callee.property.name if isinstance(callee.property, Identifier) else None
    if isinstance(callee, Identifier):
        return callee.name
    return None


def enclosing_element_name(attribute: VAttribute) -> str | None:
    """Return the tag name of the element owning ``attribute``."""

    start_tag = attribute.parent
    element = start_tag.parent if start_tag is not None else None
    return element.name if isinstance(element, VElement) else None


def js_truthy(value: LiteralValue) -> bool:
    """Return whether ``value`` is truthy under JavaScript semantics."""

    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def js_string(value: LiteralValue) -> str:
    """Return ``value`` formatted the way JavaScript's ``String()`` would."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


__all__ = [
    "PATH_ATTRIBUTE",
    "TRANSLATION_DIRECTIVE",
    "TRANSLATION_ELEMENTS",
    "TRANSLATOR_CALL_NAMES",
    "callee_name",
    "collect_keys_from_ast",
    "js_string",
    "js_truthy",
]
