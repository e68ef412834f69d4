# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""AST node variants, traversal and ingestion helpers."""

from __future__ import annotations

from .estree import ensure_node, normalise_visitor_keys
from .nodes import VISITOR_KEYS, Node, Program, VisitorKeys
from .traverse import NodeVisitor, link_parents, traverse_nodes

__all__ = [
    "Node",
    "NodeVisitor",
    "Program",
    "VISITOR_KEYS",
    "VisitorKeys",
    "ensure_node",
    "link_parents",
    "normalise_visitor_keys",
    "traverse_nodes",
]
