# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""AST node variants shared by the script and template parsers.

Each node class carries a fixed ``type`` tag mirroring the ESTree and
vue-eslint-parser taxonomies. Constructs the key extractor never inspects are
represented by :class:`GenericNode`, which keeps its own tag and children so a
walker can still reach nested calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, TypeAlias

LiteralValue: TypeAlias = str | int | float | bool | None
VisitorKeys: TypeAlias = Mapping[str, tuple[str, ...]]


@dataclass(kw_only=True, eq=False)
class Node:
    """Base class for every AST node.

    Attributes:
        type: Node kind tag.
        range: Byte offsets ``(start, end)`` of the node within the parsed text.
        parent: Enclosing node, attached once the tree is complete.
    """

    type: str = field(init=False, default="Node")
    range: tuple[int, int] = (0, 0)
    parent: Node | None = field(default=None, repr=False)


@dataclass(kw_only=True, eq=False)
class GenericNode(Node):
    """Node kind without dedicated handling; only its children matter."""

    type: str
    children: list[Node] = field(default_factory=list)


@dataclass(kw_only=True, eq=False)
class Identifier(Node):
    """Script identifier, including property names in member access."""

    type: str = field(init=False, default="Identifier")
    name: str


@dataclass(kw_only=True, eq=False)
class Literal(Node):
    """Script literal; ``value`` is the cooked value and ``raw`` the source text."""

    type: str = field(init=False, default="Literal")
    value: LiteralValue
    raw: str = ""


@dataclass(kw_only=True, eq=False)
class CallExpression(Node):
    """Function or method call; ``callee`` is the called expression."""

    type: str = field(init=False, default="CallExpression")
    callee: Node
    arguments: list[Node] = field(default_factory=list)
    optional: bool = False


@dataclass(kw_only=True, eq=False)
class MemberExpression(Node):
    """Property access; ``computed`` marks subscript access such as ``obj[key]``."""

    type: str = field(init=False, default="MemberExpression")
    object: Node
    property: Node
    computed: bool = False
    optional: bool = False


@dataclass(kw_only=True, eq=False)
class VIdentifier(Node):
    """Attribute or directive name part in a template."""

    type: str = field(init=False, default="VIdentifier")
    name: str
    raw_name: str = ""


@dataclass(kw_only=True, eq=False)
class VDirectiveKey(Node):
    """Parsed directive name such as ``v-bind:title.prop``.

    Attributes:
        name: Directive name without prefix (``bind`` for ``:title``).
        argument: Directive argument, ``None`` when absent.
        modifiers: Dot-separated modifiers in source order.
    """

    type: str = field(init=False, default="VDirectiveKey")
    name: VIdentifier
    argument: Node | None = None
    modifiers: list[VIdentifier] = field(default_factory=list)


@dataclass(kw_only=True, eq=False)
class VLiteral(Node):
    """Unescaped value of a plain (non-directive) template attribute."""

    type: str = field(init=False, default="VLiteral")
    value: str


@dataclass(kw_only=True, eq=False)
class VExpressionContainer(Node):
    """Mustache or directive value wrapping a script expression.

    ``expression`` is ``None`` when the value is empty or failed to parse.
    """

    type: str = field(init=False, default="VExpressionContainer")
    expression: Node | None = None


@dataclass(kw_only=True, eq=False)
class VAttribute(Node):
    """Template attribute.

    Attributes:
        directive: Whether the attribute is a Vue directive.
        key: ``VIdentifier`` for plain attributes, ``VDirectiveKey`` for directives.
        value: ``VLiteral`` for plain attributes, ``VExpressionContainer`` for
            directives, ``None`` when the attribute has no value.
    """

    type: str = field(init=False, default="VAttribute")
    directive: bool
    key: VIdentifier | VDirectiveKey
    value: VLiteral | VExpressionContainer | None = None


@dataclass(kw_only=True, eq=False)
class VStartTag(Node):
    """Opening tag of a template element with its attributes."""

    type: str = field(init=False, default="VStartTag")
    attributes: list[VAttribute] = field(default_factory=list)
    self_closing: bool = False


@dataclass(kw_only=True, eq=False)
class VEndTag(Node):
    """Closing tag of a template element."""

    type: str = field(init=False, default="VEndTag")


@dataclass(kw_only=True, eq=False)
class VText(Node):
    """Template text outside mustaches, with HTML entities decoded."""

    type: str = field(init=False, default="VText")
    value: str


@dataclass(kw_only=True, eq=False)
class VElement(Node):
    """Template element; ``name`` is lower-cased, ``raw_name`` keeps the source spelling."""

    type: str = field(init=False, default="VElement")
    name: str
    raw_name: str = ""
    start_tag: VStartTag = field(default_factory=VStartTag)
    children: list[Node] = field(default_factory=list)
    end_tag: VEndTag | None = None


@dataclass(kw_only=True, eq=False)
class Program(Node):
    """Root node; ``template_body`` holds the component template when present."""

    type: str = field(init=False, default="Program")
    body: list[Node] = field(default_factory=list)
    template_body: VElement | None = None


# ``Program`` lists ``body`` only; ``template_body`` is walked in a separate pass.
VISITOR_KEYS: Final[VisitorKeys] = MappingProxyType(
    {
        "Program": ("body",),
        "Identifier": (),
        "Literal": (),
        "CallExpression": ("callee", "arguments"),
        "MemberExpression": ("object", "property"),
        "VIdentifier": (),
        "VDirectiveKey": ("name", "argument", "modifiers"),
        "VLiteral": (),
        "VExpressionContainer": ("expression",),
        "VAttribute": ("key", "value"),
        "VStartTag": ("attributes",),
        "VEndTag": (),
        "VText": (),
        "VElement": ("start_tag", "children", "end_tag"),
    },
)


__all__ = [
    "CallExpression",
    "GenericNode",
    "Identifier",
    "Literal",
    "LiteralValue",
    "MemberExpression",
    "Node",
    "Program",
    "VAttribute",
    "VDirectiveKey",
    "VElement",
    "VEndTag",
    "VExpressionContainer",
    "VISITOR_KEYS",
    "VIdentifier",
    "VLiteral",
    "VStartTag",
    "VText",
    "VisitorKeys",
]
