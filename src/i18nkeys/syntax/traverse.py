# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Generic depth-first walker over :mod:`i18nkeys.syntax.nodes` trees."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import fields
from typing import Final, Protocol, runtime_checkable

from .nodes import VISITOR_KEYS, GenericNode, Node, VisitorKeys

_NON_CHILD_FIELDS: Final[frozenset[str]] = frozenset({"type", "range", "parent"})


@runtime_checkable
class NodeVisitor(Protocol):
    """Callbacks invoked while walking a tree."""

    def enter_node(self, node: Node) -> None:
        """Handle ``node`` before its children are visited."""

    def leave_node(self, node: Node) -> None:
        """Handle ``node`` after its children were visited."""


def fallback_keys(node: Node) -> tuple[str, ...]:
    """Return the fields of ``node`` that currently hold child nodes.

    Args:
        node: Node whose kind is missing from the active visitor keys.

    Returns:
        tuple[str, ...]: Field names in declaration order.
    """

    if isinstance(node, GenericNode):
        return ("children",)
    keys: list[str] = []
    for field_info in fields(node):
        if field_info.name in _NON_CHILD_FIELDS:
            continue
        value = getattr(node, field_info.name, None)
        if isinstance(value, Node) or (isinstance(value, list) and any(isinstance(item, Node) for item in value)):
            keys.append(field_info.name)
    return tuple(keys)


def iter_child_nodes(node: Node, visitor_keys: VisitorKeys | None = None) -> Iterator[Node]:
    """Yield the direct children of ``node`` in visitor-key order.

    Args:
        node: Parent node.
        visitor_keys: Mapping of node kind to child field names. Kinds absent
            from the mapping, and every :class:`GenericNode`, use
            :func:`fallback_keys`.

    Yields:
        Node: Child nodes; ``None`` slots are skipped.
    """

    keys_by_type = VISITOR_KEYS if visitor_keys is None else visitor_keys
    keys: Sequence[str] | None = None if isinstance(node, GenericNode) else keys_by_type.get(node.type)
    if keys is None:
        keys = fallback_keys(node)
    for key in keys:
        value = getattr(node, key, None)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            yield from (item for item in value if isinstance(item, Node))


def traverse_nodes(node: Node, visitor: NodeVisitor, *, visitor_keys: VisitorKeys | None = None) -> None:
    """Walk ``node`` depth-first calling ``enter_node`` and ``leave_node``.

    The walk is iterative so deeply nested expressions cannot exhaust the
    interpreter recursion limit.

    Args:
        node: Root of the walk.
        visitor: Callbacks receiving every visited node.
        visitor_keys: Optional mapping overriding :data:`VISITOR_KEYS`.
    """

    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, leaving = stack.pop()
        if leaving:
            visitor.leave_node(current)
            continue
        visitor.enter_node(current)
        stack.append((current, True))
        children = list(iter_child_nodes(current, visitor_keys))
        stack.extend((child, False) for child in reversed(children))


def iter_nodes(node: Node, *, visitor_keys: VisitorKeys | None = None) -> Iterator[Node]:
    """Yield ``node`` and its descendants in pre-order."""

    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current, visitor_keys))))


def link_parents(root: Node, *, visitor_keys: VisitorKeys | None = None) -> Node:
    """Point every descendant's ``parent`` at its enclosing node.

    Args:
        root: Tree root; its own ``parent`` is left untouched.
        visitor_keys: Optional mapping overriding :data:`VISITOR_KEYS`.

    Returns:
        Node: ``root`` for call chaining.
    """

    for current in iter_nodes(root, visitor_keys=visitor_keys):
        for child in iter_child_nodes(current, visitor_keys):
            child.parent = current
    return root


def merge_visitor_keys(overrides: Mapping[str, Sequence[str]] | None) -> VisitorKeys:
    """Return :data:`VISITOR_KEYS` updated with ``overrides``."""

    if not overrides:
        return VISITOR_KEYS
    merged = dict(VISITOR_KEYS)
    merged.update({kind: tuple(keys) for kind, keys in overrides.items()})
    return merged


__all__ = [
    "NodeVisitor",
    "fallback_keys",
    "iter_child_nodes",
    "iter_nodes",
    "link_parents",
    "merge_visitor_keys",
    "traverse_nodes",
]
