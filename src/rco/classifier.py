# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Classify declarations as components, hooks, or ordinary code."""

import logging
import re
from collections.abc import Iterator

from tree_sitter import Node

from rco.locator import (
    CLASS_DECLARATION_TYPES,
    DECLARATOR_TYPE,
    FUNCTION_DECLARATION_TYPES,
    locate_render_body,
)
from rco.markup import contains_markup
from rco.model import Declaration, DeclarationKind
from rco.naming import (
    ANONYMOUS_NAME,
    COMPONENT_NAME_PATTERN,
    UNKNOWN_NAME,
    declaration_name,
)
from rco.syntax import (
    SyntaxKind,
    SyntaxTree,
    kind_of,
    named_children,
    node_text,
    unwrap_parentheses,
)

logger = logging.getLogger(__name__)

HOOK_NAME_PATTERN = re.compile(r"^use[A-Z]")
COMPONENT_BASE_CLASSES = frozenset({"Component", "PureComponent"})


def iter_declarations(tree: SyntaxTree) -> Iterator[Declaration]:
    """Yield classified declarations in document order.

    The whole tree is walked, but the subtree of an accepted declaration is
    never entered, so components declared inside another component are not
    reported while declarations nested in ordinary code still are.

    Args:
        tree: Parsed document.

    Yields:
        Component and hook declarations.
    """
    stack = [tree.root]
    while stack:
        node = stack.pop()
        declaration = classify(node, tree)
        if declaration is not None:
            yield declaration
            continue
        stack.extend(reversed(named_children(node)))


def classify(node: Node, tree: SyntaxTree) -> Declaration | None:
    """Classify one node; ``None`` when it is not a component or hook."""
    if node.type in FUNCTION_DECLARATION_TYPES:
        return _classify_function_declaration(node, tree)
    if node.type == DECLARATOR_TYPE:
        return _classify_declarator(node, tree)
    if node.type in CLASS_DECLARATION_TYPES:
        return _classify_class(node, tree)
    return None


def is_component_name(name: str) -> bool:
    return COMPONENT_NAME_PATTERN.match(name) is not None


def is_hook_name(name: str) -> bool:
    return HOOK_NAME_PATTERN.match(name) is not None


def _classify_function_declaration(
    node: Node, tree: SyntaxTree
) -> Declaration | None:
    if node.child_by_field_name("name") is None:
        return None
    name = declaration_name(node, ANONYMOUS_NAME)
    body = locate_render_body(node)
    if is_component_name(name) and contains_markup(body.node):
        return _declaration("function_component", name, node, body.node, tree)
    if is_hook_name(name):
        return _declaration("hook", name, node, body.node, tree)
    return None


def _classify_declarator(node: Node, tree: SyntaxTree) -> Declaration | None:
    target = node.child_by_field_name("name")
    if target is None or kind_of(target) is not SyntaxKind.IDENTIFIER:
        return None
    value = unwrap_parentheses(node.child_by_field_name("value"))
    if value is None or kind_of(value) is not SyntaxKind.FUNCTION:
        return None
    name = declaration_name(node, UNKNOWN_NAME)
    body = locate_render_body(node)
    if is_component_name(name) and contains_markup(body.node):
        return _declaration("arrow_component", name, node, body.node, tree)
    if is_hook_name(name):
        return _declaration("hook", name, node, body.node, tree)
    return None


def _classify_class(node: Node, tree: SyntaxTree) -> Declaration | None:
    name = declaration_name(node, ANONYMOUS_NAME)
    if not is_component_name(name) or not extends_component(node):
        return None
    body = locate_render_body(node)
    if body.status != "found":
        logger.debug(f"Class component without render method (name={name})")
        return None
    return _declaration("class_component", name, node, body.node, tree)


def extends_component(class_node: Node) -> bool:
    """Check whether a class extends ``Component``/``PureComponent``.

    Accepts a bare identifier or a member reference ending in either name,
    such as ``React.Component``.
    """
    superclass = _superclass(class_node)
    if superclass is None:
        return False
    kind = kind_of(superclass)
    if kind is SyntaxKind.IDENTIFIER:
        return node_text(superclass) in COMPONENT_BASE_CLASSES
    if kind is SyntaxKind.MEMBER:
        prop = superclass.child_by_field_name("property")
        return prop is not None and node_text(prop) in COMPONENT_BASE_CLASSES
    return False


def _superclass(class_node: Node) -> Node | None:
    heritage = next(
        (child for child in class_node.children if child.type == "class_heritage"),
        None,
    )
    if heritage is None:
        return None
    for child in named_children(heritage):
        if child.type == "extends_clause":
            value = child.child_by_field_name("value")
            if value is None:
                clause_children = named_children(child)
                value = clause_children[0] if clause_children else None
            return unwrap_parentheses(value)
        if child.type == "implements_clause":
            continue
        return unwrap_parentheses(child)
    return None


def _declaration(
    kind: DeclarationKind,
    name: str,
    node: Node,
    body: Node | None,
    tree: SyntaxTree,
) -> Declaration:
    return Declaration(kind=kind, name=name, span=tree.span(node), node=node, body=body)
