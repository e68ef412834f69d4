# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse JavaScript and TypeScript text into ESTree-shaped nodes via Tree-sitter."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import PurePath
from typing import Final

from tree_sitter import Node as TSNode

from ..errors import ParseError
from ..syntax.nodes import (
    CallExpression,
    GenericNode,
    Identifier,
    Literal,
    LiteralValue,
    MemberExpression,
    Node,
    Program,
)
from ..syntax.traverse import link_parents
from .grammars import JAVASCRIPT, TSX, TYPESCRIPT, create_parser

LOGGER = logging.getLogger(__name__)

_SUFFIX_GRAMMARS: Final[dict[str, str]] = {
    ".ts": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
    ".tsx": TSX,
}
_IDENTIFIER_TYPES: Final[frozenset[str]] = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
        "undefined",
    },
)
_SKIPPED_TYPES: Final[frozenset[str]] = frozenset({"comment", "hash_bang_line", "html_comment"})
_SIMPLE_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def grammar_for_path(file_path: str | PurePath | None) -> str:
    """Return the script grammar matching the suffix of ``file_path``."""

    if not file_path:
        return JAVASCRIPT
    return _SUFFIX_GRAMMARS.get(PurePath(file_path).suffix.lower(), JAVASCRIPT)


def parse_script(text: str, *, grammar: str = JAVASCRIPT, offset: int = 0) -> Program:
    """Parse a complete script into a :class:`Program`.

    Args:
        text: Script source.
        grammar: Grammar identifier used for parsing.
        offset: Byte offset added to every node range, used for embedded scripts.

    Returns:
        Program: Root node with parent links attached.

    Raises:
        ParseError: If the source contains syntax errors.
    """

    tree = create_parser(grammar).parse(text.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        raise ParseError(f"Syntax error in {grammar} source")
    converter = ScriptConverter(offset=offset)
    program = Program(body=converter.convert_children(root), range=converter.span(root))
    link_parents(program)
    return program


def parse_expression(text: str, *, grammar: str = JAVASCRIPT, offset: int = 0) -> Node | None:
    """Parse a single expression such as a template binding.

    Args:
        text: Expression source.
        grammar: Grammar identifier used for parsing.
        offset: Byte offset of ``text`` within the enclosing document.

    Returns:
        Node | None: Expression node, or ``None`` when ``text`` is not a
        single well-formed expression.
    """

    if not text.strip():
        return None
    tree = create_parser(grammar).parse(f"({text})".encode("utf-8"))
    root = tree.root_node
    if root.has_error or root.named_child_count != 1:
        return None
    statement = root.named_children[0]
    if statement.type != "expression_statement" or statement.named_child_count != 1:
        return None
    wrapper = statement.named_children[0]
    if wrapper.type != "parenthesized_expression":
        return None
    expression = ScriptConverter(offset=offset - 1).convert(wrapper)
    if expression is not None:
        link_parents(expression)
    return expression


def parse_statements(text: str, *, grammar: str = JAVASCRIPT, offset: int = 0) -> list[Node] | None:
    """Parse a statement list such as an inline event handler.

    Returns:
        list[Node] | None: Statement nodes, or ``None`` on syntax errors.
    """

    tree = create_parser(grammar).parse(text.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        return None
    statements = ScriptConverter(offset=offset).convert_children(root)
    for statement in statements:
        link_parents(statement)
    return statements


class ScriptConverter:
    """Translate Tree-sitter script nodes into :mod:`i18nkeys.syntax.nodes` variants."""

    def __init__(self, *, offset: int = 0) -> None:
        self._offset = offset
        self._handlers: dict[str, Callable[[TSNode], Node | None]] = {
            "call_expression": self._call_expression,
            "member_expression": self._member_expression,
            "subscript_expression": self._subscript_expression,
            "parenthesized_expression": self._parenthesized_expression,
            "string": self._string,
            "number": self._number,
            "true": self._constant,
            "false": self._constant,
            "null": self._constant,
            "regex": self._regex,
            "template_string": self._template_string,
            "this": self._this,
        }

    def span(self, node: TSNode) -> tuple[int, int]:
        """Return the byte range of ``node`` shifted by the converter offset."""

        return node.start_byte + self._offset, node.end_byte + self._offset

    def convert(self, node: TSNode) -> Node | None:
        """Convert ``node``; comments and punctuation yield ``None``."""

        if not node.is_named or node.type in _SKIPPED_TYPES:
            return None
        if node.type in _IDENTIFIER_TYPES:
            return Identifier(name=_text(node), range=self.span(node))
        handler = self._handlers.get(node.type)
        if handler is not None:
            return handler(node)
        return GenericNode(type=node.type, children=self.convert_children(node), range=self.span(node))

    def convert_children(self, node: TSNode) -> list[Node]:
        """Convert every named child of ``node``, dropping skipped kinds."""

        children: list[Node] = []
        for child in node.named_children:
            converted = self.convert(child)
            if converted is not None:
                children.append(converted)
        return children

    def _required(self, node: TSNode | None) -> Node:
        converted = self.convert(node) if node is not None else None
        if converted is None:
            return GenericNode(type="missing")
        return converted

    def _call_expression(self, node: TSNode) -> Node:
        arguments_node = node.child_by_field_name("arguments")
        arguments: list[Node] = []
        if arguments_node is not None:
            if arguments_node.type == "arguments":
                arguments = self.convert_children(arguments_node)
            else:
                # Tagged templates carry the template string as their only argument.
                arguments = [self._required(arguments_node)]
        return CallExpression(
            callee=self._required(node.child_by_field_name("function")),
            arguments=arguments,
            optional=node.child_by_field_name("optional_chain") is not None,
            range=self.span(node),
        )

    def _member_expression(self, node: TSNode) -> Node:
        return MemberExpression(
            object=self._required(node.child_by_field_name("object")),
            property=self._required(node.child_by_field_name("property")),
            computed=False,
            optional=node.child_by_field_name("optional_chain") is not None,
            range=self.span(node),
        )

    def _subscript_expression(self, node: TSNode) -> Node:
        return MemberExpression(
            object=self._required(node.child_by_field_name("object")),
            property=self._required(node.child_by_field_name("index")),
            computed=True,
            optional=node.child_by_field_name("optional_chain") is not None,
            range=self.span(node),
        )

    def _parenthesized_expression(self, node: TSNode) -> Node | None:
        inner = self.convert_children(node)
        if len(inner) == 1:
            return inner[0]
        return GenericNode(type=node.type, children=inner, range=self.span(node))

    def _string(self, node: TSNode) -> Node:
        return Literal(value=string_value(node), raw=_text(node), range=self.span(node))

    def _number(self, node: TSNode) -> Node:
        raw = _text(node)
        return Literal(value=number_value(raw), raw=raw, range=self.span(node))

    def _constant(self, node: TSNode) -> Node:
        values: dict[str, LiteralValue] = {"true": True, "false": False, "null": None}
        return Literal(value=values[node.type], raw=node.type, range=self.span(node))

    def _regex(self, node: TSNode) -> Node:
        raw = _text(node)
        return Literal(value=raw, raw=raw, range=self.span(node))

    def _template_string(self, node: TSNode) -> Node:
        expressions: list[Node] = []
        for child in node.named_children:
            if child.type == "template_substitution":
                expressions.extend(self.convert_children(child))
        return GenericNode(type="TemplateLiteral", children=expressions, range=self.span(node))

    def _this(self, node: TSNode) -> Node:
        return GenericNode(type="ThisExpression", range=self.span(node))


def string_value(node: TSNode) -> str:
    """Return the cooked value of a Tree-sitter ``string`` node."""

    parts: list[str] = []
    named = [child for child in node.children if child.is_named]
    if not named:
        raw = _text(node)
        return raw[1:-1] if len(raw) >= 2 else ""
    for child in named:
        if child.type == "escape_sequence":
            parts.append(decode_escape(_text(child)))
        else:
            parts.append(_text(child))
    return "".join(parts)


def decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as ``\\n`` or ``\\u{1F600}``."""

    body = sequence[1:]
    if not body:
        return ""
    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body[0] == "u" and len(body) == 5:
            return chr(int(body[1:], 16))
        if body[0] == "x" and len(body) == 3:
            return chr(int(body[1:], 16))
    except ValueError:
        return body
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body[0] in "\r\n\u2028\u2029":
        return ""
    return body


def number_value(raw: str) -> int | float:
    """Return the numeric value of a JavaScript number literal."""

    text = raw.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    lowered = text.lower()
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            return int(lowered, 0)
        if lowered.isdigit():
            if len(lowered) > 1 and lowered.startswith("0"):
                return _legacy_octal(lowered)
            return int(lowered)
        return float(lowered)
    except ValueError:
        LOGGER.debug("unrecognised number literal %s", raw)
        return float("nan")


def _legacy_octal(text: str) -> int:
    if all(char in "01234567" for char in text):
        return int(text, 8)
    return int(text)


def _text(node: TSNode) -> str:
    raw = node.text
    if raw is None:
        return ""
    return raw.decode("utf-8")


__all__ = [
    "ScriptConverter",
    "decode_escape",
    "grammar_for_path",
    "number_value",
    "parse_expression",
    "parse_script",
    "parse_statements",
    "string_value",
]
