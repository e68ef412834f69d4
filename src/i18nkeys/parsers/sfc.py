# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse Vue single-file components into a ``Program`` with a template body.

The document is split with the Tree-sitter HTML grammar. ``<script>`` blocks
are parsed as scripts and concatenated into ``Program.body``; the first
top-level ``<template>`` becomes ``Program.template_body``. Template
expressions that fail to parse are kept as empty expression containers, while
script syntax errors propagate as :class:`~i18nkeys.errors.ParseError`.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Final

from tree_sitter import Node as TSNode

from ..syntax.nodes import (
    GenericNode,
    Node,
    Program,
    VAttribute,
    VDirectiveKey,
    VElement,
    VEndTag,
    VExpressionContainer,
    VIdentifier,
    VLiteral,
    VStartTag,
    VText,
)
from ..syntax.traverse import link_parents
from .grammars import HTML, JAVASCRIPT, TSX, TYPESCRIPT, create_parser
from .script import parse_expression, parse_script, parse_statements

LOGGER = logging.getLogger(__name__)

TEMPLATE_TAG: Final[str] = "template"
_DIRECTIVE_SHORTHANDS: Final[dict[str, str]] = {":": "bind", ".": "bind", "@": "on", "#": "slot"}
_LANG_GRAMMARS: Final[dict[str, str]] = {"ts": TYPESCRIPT, "typescript": TYPESCRIPT, "tsx": TSX}
_FOR_ALIAS: Final = re.compile(r"^(.*?)\s+(?:in|of)\s+(.*)$", re.DOTALL)
_TAG_TYPES: Final[frozenset[str]] = frozenset({"start_tag", "self_closing_tag"})
_CONTENT_ELEMENT_TYPES: Final[frozenset[str]] = frozenset({"element", "script_element", "style_element"})
_RAW_TEXT_ELEMENT_TYPES: Final[frozenset[str]] = frozenset({"script_element", "style_element"})


def parse_sfc(text: str, *, script_grammar: str | None = None) -> Program:
    """Parse a Vue single-file component.

    Args:
        text: Component source.
        script_grammar: Grammar used for scripts and template expressions.
            ``None`` selects one from the ``lang`` attribute of the first
            ``<script>`` block, defaulting to JavaScript.

    Returns:
        Program: Root node whose ``template_body`` holds the template tree.

    Raises:
        ParseError: If a ``<script>`` block contains syntax errors.
    """

    source = text.encode("utf-8")
    document = create_parser(HTML).parse(source).root_node
    blocks = document.named_children
    grammar = script_grammar or _grammar_from_blocks(blocks)

    program = Program(range=(document.start_byte, document.end_byte))
    for block in blocks:
        if block.type == "script_element":
            program.body.extend(_parse_script_block(block, grammar))
        elif block.type == "element" and program.template_body is None and _tag_name(block) == TEMPLATE_TAG:
            program.template_body = TemplateBuilder(source, grammar).build_element(block)
    link_parents(program)
    if program.template_body is not None:
        program.template_body.parent = program
        link_parents(program.template_body)
    return program


def _grammar_from_blocks(blocks: list[TSNode]) -> str:
    for block in blocks:
        if block.type != "script_element":
            continue
        lang = _attribute_map(_start_tag(block)).get("lang")
        if lang:
            return _LANG_GRAMMARS.get(lang.lower(), JAVASCRIPT)
    return JAVASCRIPT


def _parse_script_block(block: TSNode, default_grammar: str) -> list[Node]:
    raw = next((child for child in block.named_children if child.type == "raw_text"), None)
    if raw is None:
        return []
    lang = _attribute_map(_start_tag(block)).get("lang")
    grammar = _LANG_GRAMMARS.get(lang.lower(), JAVASCRIPT) if lang else default_grammar
    LOGGER.debug("parsing <script> block as %s", grammar)
    return parse_script(_decode(raw.text), grammar=grammar, offset=raw.start_byte).body


class TemplateBuilder:
    """Build ``V*`` nodes from Tree-sitter HTML elements.

    Element content is scanned for ``{{ … }}`` over the raw source bytes, so
    a mustache containing ``<`` survives even when the HTML grammar splits
    it into several nodes. Child elements that start inside a mustache are
    treated as part of the expression, as the Vue template tokenizer does.

    Args:
        source: Encoded component source the Tree-sitter nodes point into.
        grammar: Grammar used for template expressions.
    """

    def __init__(self, source: bytes, grammar: str = JAVASCRIPT) -> None:
        self._source = source
        self._grammar = grammar

    def build_element(self, node: TSNode) -> VElement:
        """Convert an HTML ``element`` (or raw-text element) into a :class:`VElement`."""

        tag = _start_tag(node)
        raw_name = _tag_name(node, lower=False)
        element = VElement(
            name=raw_name.lower(),
            raw_name=raw_name,
            start_tag=self._build_start_tag(tag) if tag is not None else VStartTag(),
            range=(node.start_byte, node.end_byte),
        )
        end_tag = next((child for child in node.named_children if child.type == "end_tag"), None)
        if end_tag is not None:
            element.end_tag = VEndTag(range=(end_tag.start_byte, end_tag.end_byte))
        if node.type in _RAW_TEXT_ELEMENT_TYPES:
            element.children.extend(
                VText(value=_decode(child.text), range=(child.start_byte, child.end_byte))
                for child in node.named_children
                if child.type == "raw_text"
            )
            return element
        start = tag.end_byte if tag is not None else node.start_byte
        end = end_tag.start_byte if end_tag is not None else node.end_byte
        element.children.extend(self._build_content(node, start, end))
        return element

    def _build_content(self, node: TSNode, start: int, end: int) -> list[Node]:
        nodes: list[Node] = []
        cursor = start
        for child in node.named_children:
            if child.type not in _CONTENT_ELEMENT_TYPES and child.type != "comment":
                continue
            if child.start_byte < cursor:
                continue
            cursor = self._scan_text(cursor, child.start_byte, end, nodes)
            if child.start_byte < cursor:
                continue
            if child.type != "comment":
                nodes.append(self.build_element(child))
            cursor = child.end_byte
        self._scan_text(cursor, end, end, nodes)
        return nodes

    def _scan_text(self, start: int, limit: int, end: int, nodes: list[Node]) -> int:
        """Append text and mustaches found in ``[start, limit)``; return the new cursor.

        A mustache opened before ``limit`` may close anywhere before ``end``.
        """

        cursor = start
        while cursor < limit:
            opening = self._source.find(b"{{", cursor, limit)
            closing = self._source.find(b"}}", opening + 2, end) if opening != -1 else -1
            if closing == -1:
                self._append_text(cursor, limit, nodes)
                return limit
            self._append_text(cursor, opening, nodes)
            expression = parse_expression(
                _decode(self._source[opening + 2 : closing]),
                grammar=self._grammar,
                offset=opening + 2,
            )
            nodes.append(VExpressionContainer(expression=expression, range=(opening, closing + 2)))
            cursor = closing + 2
        return cursor

    def _append_text(self, start: int, stop: int, nodes: list[Node]) -> None:
        raw = self._source[start:stop]
        if raw.strip():
            nodes.append(VText(value=html.unescape(_decode(raw)), range=(start, stop)))

    def _build_start_tag(self, tag: TSNode) -> VStartTag:
        attributes = [self.build_attribute(child) for child in tag.named_children if child.type == "attribute"]
        return VStartTag(
            attributes=attributes,
            self_closing=tag.type == "self_closing_tag",
            range=(tag.start_byte, tag.end_byte),
        )

    def build_attribute(self, node: TSNode) -> VAttribute:
        """Convert an HTML ``attribute`` into a plain or directive :class:`VAttribute`."""

        name_node = next((child for child in node.named_children if child.type == "attribute_name"), None)
        raw_name = _decode(name_node.text) if name_node is not None else ""
        value_node = _attribute_value_node(node)
        span = (node.start_byte, node.end_byte)
        directive_key = parse_directive_key(raw_name)
        if directive_key is None:
            literal = None
            if value_node is not None:
                literal = VLiteral(value=_attribute_text(value_node), range=_value_span(value_node))
            key = VIdentifier(name=raw_name.lower(), raw_name=raw_name)
            return VAttribute(directive=False, key=key, value=literal, range=span)

        container = None
        if value_node is not None:
            start, _ = _value_span(value_node)
            expression = self._directive_expression(directive_key.name.name, _attribute_text(value_node), start)
            container = VExpressionContainer(expression=expression, range=_value_span(value_node))
        return VAttribute(directive=True, key=directive_key, value=container, range=span)

    def _directive_expression(self, name: str, text: str, offset: int) -> Node | None:
        if name == "for":
            match = _FOR_ALIAS.match(text)
            if match is None:
                return None
            iterable = parse_expression(match.group(2), grammar=self._grammar, offset=offset)
            return GenericNode(type="VForExpression", children=[iterable] if iterable is not None else [])
        if name == "slot":
            return None
        expression = parse_expression(text, grammar=self._grammar, offset=offset)
        if expression is not None or name != "on":
            return expression
        statements = parse_statements(text, grammar=self._grammar, offset=offset)
        if statements is None:
            return None
        return GenericNode(type="VOnExpression", children=statements)


def parse_directive_key(raw_name: str) -> VDirectiveKey | None:
    """Split a directive attribute name into name, argument and modifiers.

    Args:
        raw_name: Attribute name as written, e.g. ``v-on:click.stop`` or ``:title``.

    Returns:
        VDirectiveKey | None: Parsed key, or ``None`` for plain attributes.
    """

    if raw_name.startswith("v-"):
        name_part, separator, remainder = raw_name[2:].partition(":")
        if separator:
            name = name_part
            argument, *modifiers = remainder.split(".")
        else:
            name, *modifiers = name_part.split(".")
            argument = ""
    elif raw_name[:1] in _DIRECTIVE_SHORTHANDS:
        name = _DIRECTIVE_SHORTHANDS[raw_name[0]]
        argument, *modifiers = raw_name[1:].split(".")
        if raw_name[0] == ".":
            modifiers.append("prop")
    else:
        return None
    return VDirectiveKey(
        name=VIdentifier(name=name, raw_name=raw_name),
        argument=VIdentifier(name=argument, raw_name=argument) if argument else None,
        modifiers=[VIdentifier(name=modifier, raw_name=modifier) for modifier in modifiers if modifier],
    )


def _start_tag(node: TSNode) -> TSNode | None:
    return next((child for child in node.named_children if child.type in _TAG_TYPES), None)


def _tag_name(node: TSNode, *, lower: bool = True) -> str:
    tag = _start_tag(node)
    if tag is None:
        return ""
    name_node = next((child for child in tag.named_children if child.type == "tag_name"), None)
    if name_node is None:
        return ""
    name = _decode(name_node.text)
    return name.lower() if lower else name


def _attribute_map(tag: TSNode | None) -> dict[str, str]:
    if tag is None:
        return {}
    values: dict[str, str] = {}
    for attribute in tag.named_children:
        if attribute.type != "attribute":
            continue
        name_node = next((child for child in attribute.named_children if child.type == "attribute_name"), None)
        if name_node is None:
            continue
        value_node = _attribute_value_node(attribute)
        values[_decode(name_node.text).lower()] = _attribute_text(value_node) if value_node is not None else ""
    return values


def _attribute_value_node(attribute: TSNode) -> TSNode | None:
    return next(
        (child for child in attribute.named_children if child.type in {"attribute_value", "quoted_attribute_value"}),
        None,
    )


def _attribute_text(value_node: TSNode) -> str:
    if value_node.type == "quoted_attribute_value":
        inner = next((child for child in value_node.named_children if child.type == "attribute_value"), None)
        return html.unescape(_decode(inner.text)) if inner is not None else ""
    return html.unescape(_decode(value_node.text))


def _value_span(value_node: TSNode) -> tuple[int, int]:
    if value_node.type == "quoted_attribute_value":
        return value_node.start_byte + 1, value_node.end_byte - 1
    return value_node.start_byte, value_node.end_byte


def _decode(raw: bytes | None) -> str:
    return raw.decode("utf-8") if raw else ""


__all__ = ["TEMPLATE_TAG", "TemplateBuilder", "parse_directive_key", "parse_sfc"]
