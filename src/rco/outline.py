# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Project rendered markup into a depth-limited outline tree."""

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from rco.config import OutlineConfig
from rco.markup import top_level_markup
from rco.model import Declaration, OutlineSymbol, SymbolKind, to_range
from rco.naming import markup_symbol_kind, markup_tag
from rco.syntax import (
    MARKUP_KINDS,
    MalformedNodeError,
    SyntaxKind,
    SyntaxTree,
    first_named_child,
    kind_of,
    markup_children,
    named_children,
    unwrap_parentheses,
)

logger = logging.getLogger(__name__)

DETAIL_BY_KIND: dict[str, str] = {
    "function_component": "Function Component",
    "arrow_component": "Function Component",
    "class_component": "Class Component",
    "hook": "Hook",
}


@dataclass
class _OutlinePass:
    """State owned by one markup projection.

    Attributes:
        tree: Parsed document, used for source spans.
        max_depth: Markup levels to emit; depth ``max_depth`` is cut.
        show_fragments: Whether fragments are emitted or collapsed.
        visited: Ids of top-level markup nodes already projected.
    """

    tree: SyntaxTree
    max_depth: int
    show_fragments: bool
    visited: set[int] = field(default_factory=set)


def build_declaration_symbol(
    declaration: Declaration, tree: SyntaxTree, config: OutlineConfig
) -> OutlineSymbol:
    """Build the outline entry for one declaration.

    Components receive their markup tree as children; hooks never do.

    Args:
        declaration: Classified declaration.
        tree: Parsed document.
        config: Configuration snapshot.

    Returns:
        Declaration outline entry.
    """
    declaration_range = to_range(declaration.span)
    kind = (
        SymbolKind.CLASS
        if declaration.kind == "class_component"
        else SymbolKind.FUNCTION
    )
    symbol = OutlineSymbol(
        name=declaration.name,
        detail=DETAIL_BY_KIND[declaration.kind],
        kind=kind,
        range=declaration_range,
        selection_range=declaration_range,
    )
    if declaration.kind != "hook" and declaration.body is not None:
        build_markup_tree(declaration.body, symbol, tree, config)
    return symbol


def build_markup_tree(
    body: Node, parent: OutlineSymbol, tree: SyntaxTree, config: OutlineConfig
) -> None:
    """Append the markup rendered by ``body`` under ``parent``.

    Each top-level markup node starts at depth 0. A subtree that fails to
    project is logged and omitted; its siblings are still projected.

    Args:
        body: Rendered-output body.
        parent: Declaration entry to populate.
        tree: Parsed document.
        config: Configuration snapshot.
    """
    outline_pass = _OutlinePass(
        tree=tree,
        max_depth=config.max_depth,
        show_fragments=config.show_fragments,
    )
    for node in top_level_markup(body):
        if node.id in outline_pass.visited:
            continue
        outline_pass.visited.add(node.id)
        try:
            _add_markup(outline_pass, node, parent, 0)
        except (MalformedNodeError, RecursionError) as exc:
            logger.warning(
                f"Skipping markup subtree (parent={parent.name}"
                f" line={node.start_point[0] + 1} error={exc})"
            )


def _add_markup(
    outline_pass: _OutlinePass, node: Node, parent: OutlineSymbol, depth: int
) -> None:
    """Emit a markup node, or collapse it when it is a hidden fragment."""
    if kind_of(node) is SyntaxKind.FRAGMENT and not outline_pass.show_fragments:
        _collapse_fragment(outline_pass, node, parent, depth)
    else:
        _add_markup_node(outline_pass, node, parent, depth)


def _add_markup_node(
    outline_pass: _OutlinePass, node: Node, parent: OutlineSymbol, depth: int
) -> None:
    if depth >= outline_pass.max_depth:
        return
    tag = markup_tag(node)
    node_range = to_range(outline_pass.tree.span(node))
    symbol = OutlineSymbol(
        name=tag,
        detail="",
        kind=markup_symbol_kind(tag),
        range=node_range,
        selection_range=node_range,
    )
    parent.children.append(symbol)
    for child in markup_children(node):
        _add_child_content(outline_pass, child, symbol, depth + 1)


def _collapse_fragment(
    outline_pass: _OutlinePass, fragment: Node, parent: OutlineSymbol, depth: int
) -> None:
    """Project a hidden fragment's children at the fragment's own depth."""
    for child in markup_children(fragment):
        _add_child_content(outline_pass, child, parent, depth)


def _add_child_content(
    outline_pass: _OutlinePass, child: Node, parent: OutlineSymbol, depth: int
) -> None:
    """Project one markup child at ``depth``; text and spreads are ignored."""
    kind = kind_of(child)
    try:
        if kind in MARKUP_KINDS:
            _add_markup(outline_pass, child, parent, depth)
        elif kind is SyntaxKind.EMBEDDED_EXPRESSION:
            _unwrap_expression(outline_pass, child, parent, depth)
    except MalformedNodeError as exc:
        logger.warning(
            f"Skipping markup child (parent={parent.name} kind={kind.value}"
            f" line={child.start_point[0] + 1} error={exc})"
        )


def _unwrap_expression(
    outline_pass: _OutlinePass, container: Node, parent: OutlineSymbol, depth: int
) -> None:
    """Project markup written inside ``{...}``.

    Handles ``cond && <A/>``, ``cond ? <A/> : <B/>`` and callbacks passed to
    calls such as ``items.map(item => <Item/>)``. The unwrapped markup takes
    the depth a literal child would have.
    """
    if depth >= outline_pass.max_depth:
        return
    expression = unwrap_parentheses(first_named_child(container))
    if expression is None:
        return
    kind = kind_of(expression)
    if kind is SyntaxKind.LOGICAL:
        right = expression.child_by_field_name("right")
        _add_operand(outline_pass, right, parent, depth)
    elif kind is SyntaxKind.TERNARY:
        for branch in ("consequence", "alternative"):
            _add_operand(
                outline_pass, expression.child_by_field_name(branch), parent, depth
            )
    elif kind is SyntaxKind.CALL:
        _unwrap_callbacks(outline_pass, expression, parent, depth)


def _unwrap_callbacks(
    outline_pass: _OutlinePass, call: Node, parent: OutlineSymbol, depth: int
) -> None:
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return
    for argument in named_children(arguments):
        if kind_of(argument) is not SyntaxKind.FUNCTION:
            continue
        body = argument.child_by_field_name("body")
        if body is None:
            raise MalformedNodeError(
                f"Callback without body (line={argument.start_point[0] + 1})"
            )
        if kind_of(body) is SyntaxKind.BLOCK:
            for statement in named_children(body):
                if kind_of(statement) is SyntaxKind.RETURN:
                    _add_operand(
                        outline_pass, first_named_child(statement), parent, depth
                    )
        else:
            _add_operand(outline_pass, body, parent, depth)


def _add_operand(
    outline_pass: _OutlinePass,
    operand: Node | None,
    parent: OutlineSymbol,
    depth: int,
) -> None:
    operand = unwrap_parentheses(operand)
    if operand is not None and kind_of(operand) in MARKUP_KINDS:
        _add_markup(outline_pass, operand, parent, depth)
