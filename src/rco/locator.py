# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Locate the body that produces a declaration's rendered output."""

from dataclasses import dataclass
from typing import Literal

from tree_sitter import Node

from rco.syntax import (
    SyntaxKind,
    kind_of,
    named_children,
    node_text,
    unwrap_parentheses,
)

LookupStatus = Literal["found", "not_found", "malformed"]

FUNCTION_DECLARATION_TYPES = frozenset(
    {"function_declaration", "generator_function_declaration"}
)
CLASS_DECLARATION_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})
DECLARATOR_TYPE = "variable_declarator"
RENDER_METHOD = "render"


@dataclass(frozen=True)
class BodyLookup:
    """Represent the outcome of a render-body lookup.

    Attributes:
        status: ``found`` with a node, ``not_found`` when the declaration has
            no qualifying body, ``malformed`` when the tree shape is unexpected.
        node: Located body when ``status`` is ``found``.
    """

    status: LookupStatus
    node: Node | None = None

    @classmethod
    def found(cls, node: Node) -> "BodyLookup":
        return cls(status="found", node=node)

    @classmethod
    def not_found(cls) -> "BodyLookup":
        return cls(status="not_found")

    @classmethod
    def malformed(cls) -> "BodyLookup":
        return cls(status="malformed")


def locate_render_body(declaration: Node) -> BodyLookup:
    """Find the body to scan for rendered markup.

    Function declarations and function-valued declarators yield their block
    body, or the bare expression of an expression-bodied arrow. Classes
    yield the body of their ``render`` method.

    Args:
        declaration: Function declaration, variable declarator, or class node.

    Returns:
        Body lookup result.
    """
    if declaration.type in FUNCTION_DECLARATION_TYPES:
        return function_body(declaration)
    if declaration.type == DECLARATOR_TYPE:
        value = unwrap_parentheses(declaration.child_by_field_name("value"))
        if value is None or kind_of(value) is not SyntaxKind.FUNCTION:
            return BodyLookup.not_found()
        return function_body(value)
    if declaration.type in CLASS_DECLARATION_TYPES:
        return render_method_body(declaration)
    return BodyLookup.not_found()


def function_body(function: Node) -> BodyLookup:
    """Return the block or expression body of a function node."""
    body = function.child_by_field_name("body")
    if body is None:
        return BodyLookup.malformed()
    if kind_of(body) is SyntaxKind.BLOCK:
        return BodyLookup.found(body)
    return BodyLookup.found(unwrap_parentheses(body) or body)


def render_method_body(class_node: Node) -> BodyLookup:
    """Return the body of the class's ``render`` instance method."""
    class_body = class_node.child_by_field_name("body")
    if class_body is None:
        return BodyLookup.malformed()
    for member in named_children(class_body):
        if member.type != "method_definition":
            continue
        name = member.child_by_field_name("name")
        if name is None or name.type != "property_identifier":
            continue
        if node_text(name) == RENDER_METHOD:
            return function_body(member)
    return BodyLookup.not_found()
