# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert ESTree / vue-eslint-parser shaped mappings into typed nodes.

Third-party parsers registered through entry points commonly hand back plain
JSON-like dictionaries. This adapter turns them into the node variants used
everywhere else so the extractor only ever sees one representation. Both
historical directive key layouts (``key.name.name`` and ``key.name``) end up as
``VDirectiveKey(name=VIdentifier(...))``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Final, cast

from .nodes import (
    CallExpression,
    GenericNode,
    Identifier,
    Literal,
    LiteralValue,
    MemberExpression,
    Node,
    Program,
    VAttribute,
    VDirectiveKey,
    VElement,
    VEndTag,
    VExpressionContainer,
    VIdentifier,
    VisitorKeys,
    VLiteral,
    VStartTag,
    VText,
)
from .traverse import link_parents

_CAMEL_BOUNDARY: Final = re.compile(r"(?<!^)(?=[A-Z])")
_SKIPPED_FIELDS: Final[frozenset[str]] = frozenset(
    {"type", "parent", "loc", "range", "start", "end", "tokens", "comments", "leadingComments", "trailingComments"},
)


def snake_case(name: str) -> str:
    """Return ``name`` converted from camelCase to snake_case."""

    return _CAMEL_BOUNDARY.sub("_", name).lower()


def normalise_visitor_keys(visitor_keys: Mapping[str, Sequence[str]] | None) -> VisitorKeys | None:
    """Translate ESTree visitor keys to the snake_case field names used by nodes.

    Args:
        visitor_keys: Mapping of node kind to camelCase child field names.

    Returns:
        VisitorKeys | None: Mapping with snake_case field names, or ``None``
        when no mapping was supplied.
    """

    if visitor_keys is None:
        return None
    return {kind: tuple(snake_case(key) for key in keys) for kind, keys in visitor_keys.items()}


def ensure_node(ast: Node | Mapping[str, object]) -> Node:
    """Return ``ast`` as a node tree with parent links attached.

    Args:
        ast: Node produced by a built-in parser or ESTree-shaped mapping.

    Returns:
        Node: Typed node tree.

    Raises:
        TypeError: If ``ast`` is neither a node nor a mapping.
    """

    if isinstance(ast, Node):
        return ast
    if not isinstance(ast, Mapping):
        raise TypeError(f"Unsupported AST payload of type {type(ast).__name__}")
    node = to_node(ast)
    link_parents(node)
    if isinstance(node, Program) and node.template_body is not None:
        node.template_body.parent = node
        link_parents(node.template_body)
    return node


def to_node(payload: Mapping[str, object]) -> Node:
    """Convert a single ESTree mapping (and its descendants) into a node.

    Args:
        payload: Mapping carrying at least a ``type`` entry.

    Returns:
        Node: Typed node; unknown kinds become :class:`GenericNode`.
    """

    kind = str(payload.get("type", "Unknown"))
    span = _span(payload)
    builder = _BUILDERS.get(kind)
    if builder is not None:
        node = builder(payload)
    else:
        node = GenericNode(type=kind, children=_generic_children(payload))
    node.range = span
    return node


def _span(payload: Mapping[str, object]) -> tuple[int, int]:
    raw = payload.get("range")
    if isinstance(raw, Sequence) and len(raw) == 2 and all(isinstance(item, int) for item in raw):
        return int(raw[0]), int(raw[1])
    start, end = payload.get("start"), payload.get("end")
    if isinstance(start, int) and isinstance(end, int):
        return start, end
    return 0, 0


def _is_node_mapping(value: object) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


def _optional_node(value: object) -> Node | None:
    if _is_node_mapping(value):
        return to_node(cast(Mapping[str, object], value))
    return None


def _node_list(value: object) -> list[Node]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return []
    return [to_node(cast(Mapping[str, object], item)) for item in value if _is_node_mapping(item)]


def _generic_children(payload: Mapping[str, object]) -> list[Node]:
    children: list[Node] = []
    for key, value in payload.items():
        if key in _SKIPPED_FIELDS:
            continue
        if _is_node_mapping(value):
            children.append(to_node(cast(Mapping[str, object], value)))
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            children.extend(_node_list(value))
    return children


def _required_node(payload: Mapping[str, object], key: str) -> Node:
    node = _optional_node(payload.get(key))
    if node is None:
        return GenericNode(type="Unknown")
    return node


def _literal_value(value: object) -> LiteralValue:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    # RegExp and BigInt literals serialise as objects; keep their text.
    return str(value)


def _build_program(payload: Mapping[str, object]) -> Node:
    template = _optional_node(payload.get("templateBody"))
    return Program(
        body=_node_list(payload.get("body")),
        template_body=template if isinstance(template, VElement) else None,
    )


def _build_identifier(payload: Mapping[str, object]) -> Node:
    return Identifier(name=str(payload.get("name", "")))


def _build_literal(payload: Mapping[str, object]) -> Node:
    raw = payload.get("raw")
    return Literal(value=_literal_value(payload.get("value")), raw=raw if isinstance(raw, str) else "")


def _build_call(payload: Mapping[str, object]) -> Node:
    return CallExpression(
        callee=_required_node(payload, "callee"),
        arguments=_node_list(payload.get("arguments")),
        optional=bool(payload.get("optional", False)),
    )


def _build_member(payload: Mapping[str, object]) -> Node:
    return MemberExpression(
        object=_required_node(payload, "object"),
        property=_required_node(payload, "property"),
        computed=bool(payload.get("computed", False)),
        optional=bool(payload.get("optional", False)),
    )


def _build_v_identifier(payload: Mapping[str, object]) -> Node:
    name = str(payload.get("name", ""))
    raw_name = payload.get("rawName")
    return VIdentifier(name=name, raw_name=raw_name if isinstance(raw_name, str) else name)


def _directive_name(value: object) -> VIdentifier:
    """Accept ``name`` as a nested identifier mapping or a bare string."""

    if _is_node_mapping(value):
        node = to_node(cast(Mapping[str, object], value))
        if isinstance(node, VIdentifier):
            return node
        if isinstance(node, Identifier):
            return VIdentifier(name=node.name, raw_name=node.name, range=node.range)
    return VIdentifier(name=str(value or ""), raw_name=str(value or ""))


def _build_directive_key(payload: Mapping[str, object]) -> Node:
    modifiers = [node for node in _node_list(payload.get("modifiers")) if isinstance(node, VIdentifier)]
    argument_raw = payload.get("argument")
    argument: Node | None
    if isinstance(argument_raw, str):
        argument = VIdentifier(name=argument_raw, raw_name=argument_raw)
    else:
        argument = _optional_node(argument_raw)
    return VDirectiveKey(name=_directive_name(payload.get("name")), argument=argument, modifiers=modifiers)


def _build_v_literal(payload: Mapping[str, object]) -> Node:
    return VLiteral(value=str(payload.get("value", "")))


def _build_expression_container(payload: Mapping[str, object]) -> Node:
    return VExpressionContainer(expression=_optional_node(payload.get("expression")))


def _build_attribute(payload: Mapping[str, object]) -> Node:
    directive = bool(payload.get("directive", False))
    key_node = _optional_node(payload.get("key"))
    key: VIdentifier | VDirectiveKey
    if isinstance(key_node, (VIdentifier, VDirectiveKey)):
        key = key_node
    else:
        key = VIdentifier(name="")
    if directive and isinstance(key, VIdentifier):
        key = VDirectiveKey(name=key, range=key.range)
    value_node = _optional_node(payload.get("value"))
    value = value_node if isinstance(value_node, (VLiteral, VExpressionContainer)) else None
    return VAttribute(directive=directive, key=key, value=value)


def _build_start_tag(payload: Mapping[str, object]) -> Node:
    attributes = [node for node in _node_list(payload.get("attributes")) if isinstance(node, VAttribute)]
    return VStartTag(attributes=attributes, self_closing=bool(payload.get("selfClosing", False)))


def _build_end_tag(payload: Mapping[str, object]) -> Node:
    del payload
    return VEndTag()


def _build_text(payload: Mapping[str, object]) -> Node:
    return VText(value=str(payload.get("value", "")))


def _build_element(payload: Mapping[str, object]) -> Node:
    name = str(payload.get("name", ""))
    raw_name = payload.get("rawName")
    start_tag = _optional_node(payload.get("startTag"))
    end_tag = _optional_node(payload.get("endTag"))
    return VElement(
        name=name,
        raw_name=raw_name if isinstance(raw_name, str) else name,
        start_tag=start_tag if isinstance(start_tag, VStartTag) else VStartTag(),
        children=_node_list(payload.get("children")),
        end_tag=end_tag if isinstance(end_tag, VEndTag) else None,
    )


_BUILDERS: Final = {
    "Program": _build_program,
    "Identifier": _build_identifier,
    "Literal": _build_literal,
    "CallExpression": _build_call,
    "MemberExpression": _build_member,
    "VIdentifier": _build_v_identifier,
    "VDirectiveKey": _build_directive_key,
    "VLiteral": _build_v_literal,
    "VExpressionContainer": _build_expression_container,
    "VAttribute": _build_attribute,
    "VStartTag": _build_start_tag,
    "VEndTag": _build_end_tag,
    "VText": _build_text,
    "VElement": _build_element,
}


__all__ = ["ensure_node", "normalise_visitor_keys", "snake_case", "to_node"]
