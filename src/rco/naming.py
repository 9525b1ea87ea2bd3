# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Display labels for markup tags and declarations."""

import re

from tree_sitter import Node

from rco.model import SymbolKind
from rco.syntax import (
    MalformedNodeError,
    SyntaxKind,
    kind_of,
    named_children,
    node_text,
    opening_element,
)

FRAGMENT_LABEL = "<Fragment>"
UNKNOWN_TAG = "Unknown"
ANONYMOUS_NAME = "Anonymous"
UNKNOWN_NAME = "Unknown"
COMPONENT_NAME_PATTERN = re.compile(r"^[A-Z]")


def markup_tag(node: Node) -> str:
    """Resolve the display tag of a markup node.

    Args:
        node: Markup element or fragment node.

    Returns:
        ``<Fragment>`` for fragments, the tag as written for identifiers,
        ``a.b.c`` for member tags, ``ns:name`` for namespaced tags.

    Raises:
        MalformedNodeError: If a namespaced tag does not have two parts.
    """
    kind = kind_of(node)
    if kind is SyntaxKind.FRAGMENT:
        return FRAGMENT_LABEL
    if kind is not SyntaxKind.MARKUP_ELEMENT:
        return UNKNOWN_TAG

    if node.type == "jsx_self_closing_element":
        tag_holder: Node | None = node
    else:
        tag_holder = opening_element(node)
    if tag_holder is None:
        return UNKNOWN_TAG
    name = tag_holder.child_by_field_name("name")
    if name is None:
        return UNKNOWN_TAG

    name_kind = kind_of(name)
    if name_kind is SyntaxKind.IDENTIFIER:
        return node_text(name)
    if name_kind is SyntaxKind.MEMBER:
        return member_chain(name)
    if name_kind is SyntaxKind.NAMESPACED:
        parts = named_children(name)
        if len(parts) != 2:
            raise MalformedNodeError(
                f"Namespaced tag without two parts (line={name.start_point[0] + 1})"
            )
        return f"{node_text(parts[0])}:{node_text(parts[1])}"
    return UNKNOWN_TAG


def member_chain(node: Node) -> str:
    """Join a member-style tag such as ``Layout.Header.Title`` with dots."""
    parts: list[str] = []
    current: Node | None = node
    while current is not None:
        kind = kind_of(current)
        if kind is SyntaxKind.MEMBER:
            children = named_children(current)
            prop = current.child_by_field_name("property")
            if prop is None and children:
                prop = children[-1]
            obj = current.child_by_field_name("object")
            if obj is None and len(children) > 1:
                obj = children[0]
            if prop is not None and kind_of(prop) is SyntaxKind.IDENTIFIER:
                parts.append(node_text(prop))
            current = obj
        elif kind is SyntaxKind.IDENTIFIER:
            parts.append(node_text(current))
            break
        else:
            break
    return ".".join(reversed(parts))


def declaration_name(node: Node, fallback: str) -> str:
    """Return the declared identifier of a node, or ``fallback``."""
    name = node.child_by_field_name("name")
    if name is None or kind_of(name) is not SyntaxKind.IDENTIFIER:
        return fallback
    return node_text(name)


def markup_symbol_kind(tag: str) -> SymbolKind:
    """Map a resolved tag to its presentation kind."""
    if tag == FRAGMENT_LABEL:
        return SymbolKind.NAMESPACE
    if COMPONENT_NAME_PATTERN.match(tag):
        return SymbolKind.CLASS
    return SymbolKind.FIELD
