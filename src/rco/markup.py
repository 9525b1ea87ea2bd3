# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Markup discovery within rendered-output bodies."""

import logging
from collections.abc import Iterator

from tree_sitter import Node

from rco.syntax import MalformedNodeError, is_markup, walk

logger = logging.getLogger(__name__)


def contains_markup(body: Node | None) -> bool:
    """Check whether a body contains any markup element or fragment.

    The search is unbounded in depth and includes ``body`` itself, so an
    expression-bodied arrow function returning markup directly qualifies.
    Malformed subtrees count as containing no markup.

    Args:
        body: Function body or expression body.

    Returns:
        True when at least one markup node is found.
    """
    if body is None:
        return False
    try:
        return any(is_markup(node) for node in walk(body))
    except MalformedNodeError as exc:
        logger.debug(f"Markup detection skipped malformed subtree (error={exc})")
        return False


def top_level_markup(body: Node) -> Iterator[Node]:
    """Yield markup nodes in ``body`` that have no markup ancestor within it.

    Markup reached through non-markup wrappers (conditionals, calls, nested
    helper functions) is included; markup nested inside other markup is
    left to the recursive projection.

    Args:
        body: Rendered-output body; yielded itself when it is markup.

    Yields:
        Top-level markup nodes in document order.
    """
    stack = [body]
    while stack:
        node = stack.pop()
        if is_markup(node):
            yield node
            continue
        stack.extend(reversed(node.children))
