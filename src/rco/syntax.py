# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Tree-sitter parsing and the closed set of syntax kinds the outline consults."""

import enum
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_language

from rco.model import SourceSpan

logger = logging.getLogger(__name__)

LanguageId = Literal["javascriptreact", "typescriptreact"]

GRAMMAR_BY_LANGUAGE: dict[str, str] = {
    "javascriptreact": "javascript",
    "typescriptreact": "tsx",
}

LANGUAGE_BY_SUFFIX: dict[str, LanguageId] = {
    ".js": "javascriptreact",
    ".jsx": "javascriptreact",
    ".tsx": "typescriptreact",
}

LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})


class ParseFailure(RuntimeError):
    """Represent a grammar load or syntax failure for one document."""


class MalformedNodeError(RuntimeError):
    """Represent a subtree whose shape does not match the grammar contract."""


class SyntaxKind(enum.Enum):
    """Syntax kinds consulted while classifying and projecting markup."""

    MARKUP_ELEMENT = "markup_element"
    FRAGMENT = "fragment"
    EMBEDDED_EXPRESSION = "embedded_expression"
    LOGICAL = "logical"
    TERNARY = "ternary"
    CALL = "call"
    FUNCTION = "function"
    BLOCK = "block"
    RETURN = "return"
    PARENTHESIZED = "parenthesized"
    IDENTIFIER = "identifier"
    MEMBER = "member"
    NAMESPACED = "namespaced"
    OTHER = "other"


MARKUP_KINDS = frozenset({SyntaxKind.MARKUP_ELEMENT, SyntaxKind.FRAGMENT})

_KIND_BY_TYPE: dict[str, SyntaxKind] = {
    "jsx_self_closing_element": SyntaxKind.MARKUP_ELEMENT,
    "jsx_fragment": SyntaxKind.FRAGMENT,
    "jsx_expression": SyntaxKind.EMBEDDED_EXPRESSION,
    "ternary_expression": SyntaxKind.TERNARY,
    "call_expression": SyntaxKind.CALL,
    "arrow_function": SyntaxKind.FUNCTION,
    "function_expression": SyntaxKind.FUNCTION,
    "function": SyntaxKind.FUNCTION,
    "generator_function": SyntaxKind.FUNCTION,
    "statement_block": SyntaxKind.BLOCK,
    "return_statement": SyntaxKind.RETURN,
    "parenthesized_expression": SyntaxKind.PARENTHESIZED,
    "identifier": SyntaxKind.IDENTIFIER,
    "property_identifier": SyntaxKind.IDENTIFIER,
    "type_identifier": SyntaxKind.IDENTIFIER,
    "member_expression": SyntaxKind.MEMBER,
    "nested_identifier": SyntaxKind.MEMBER,
    "jsx_namespace_name": SyntaxKind.NAMESPACED,
}

_TAG_TYPES = frozenset({"jsx_opening_element", "jsx_closing_element"})


def kind_of(node: Node) -> SyntaxKind:
    """Map a grammar node type onto the closed ``SyntaxKind`` set.

    ``jsx_element`` is a fragment when its opening tag has no name (``<>``),
    and ``binary_expression`` is only logical for ``&&``, ``||`` and ``??``.
    """
    if node.type == "jsx_element":
        opening = opening_element(node)
        if opening is not None and opening.child_by_field_name("name") is None:
            return SyntaxKind.FRAGMENT
        return SyntaxKind.MARKUP_ELEMENT
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in LOGICAL_OPERATORS:
            return SyntaxKind.LOGICAL
        return SyntaxKind.OTHER
    return _KIND_BY_TYPE.get(node.type, SyntaxKind.OTHER)


def is_markup(node: Node | None) -> bool:
    """Return whether a node is a markup element or fragment."""
    return node is not None and kind_of(node) in MARKUP_KINDS


def opening_element(node: Node) -> Node | None:
    """Return the opening tag of a ``jsx_element``."""
    opening = node.child_by_field_name("open_tag")
    if opening is not None:
        return opening
    for child in node.children:
        if child.type == "jsx_opening_element":
            return child
    return None


def markup_children(node: Node) -> list[Node]:
    """Return the content children of a markup node in document order."""
    if node.type == "jsx_self_closing_element":
        return []
    return [
        child
        for child in named_children(node)
        if child.type not in _TAG_TYPES
    ]


def named_children(node: Node) -> list[Node]:
    """Return named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def first_named_child(node: Node) -> Node | None:
    children = named_children(node)
    return children[0] if children else None


def unwrap_parentheses(node: Node | None) -> Node | None:
    """Strip any number of ``( ... )`` wrappers around an expression."""
    while node is not None and kind_of(node) is SyntaxKind.PARENTHESIZED:
        node = first_named_child(node)
    return node


def node_text(node: Node) -> str:
    """Return the source text of a node.

    Raises:
        MalformedNodeError: If the tree does not carry source text.
    """
    if node.text is None:
        raise MalformedNodeError(f"Node has no source text (type={node.type})")
    return node.text.decode("utf-8", errors="replace")


def language_for_path(path: Path) -> LanguageId | None:
    """Return the language id selected by a file suffix, if any."""
    return LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


@dataclass(frozen=True)
class SyntaxTree:
    """Represent one parsed document.

    Attributes:
        root: Root ``program`` node.
        language_id: Language id the document was parsed as.
        lines: Raw source lines as UTF-8 bytes, used to translate columns.
    """

    root: Node
    language_id: str
    lines: tuple[bytes, ...]

    def span(self, node: Node) -> SourceSpan | None:
        """Return the 1-based line span of a node, or ``None`` if unrecoverable."""
        try:
            start_row, start_byte_column = node.start_point[0], node.start_point[1]
            end_row, end_byte_column = node.end_point[0], node.end_point[1]
            return SourceSpan(
                start_line=start_row + 1,
                start_column=self._column(start_row, start_byte_column),
                end_line=end_row + 1,
                end_column=self._column(end_row, end_byte_column),
            )
        except (IndexError, TypeError, MalformedNodeError) as exc:
            logger.debug(f"Unrecoverable node location (type={node.type} error={exc})")
            return None

    def _column(self, row: int, byte_column: int) -> int:
        """Translate a byte column to UTF-16 code units on the given row."""
        if row < 0 or row >= len(self.lines):
            raise MalformedNodeError(f"Row outside document (row={row})")
        prefix = self.lines[row][:byte_column].decode("utf-8", errors="replace")
        return len(prefix.encode("utf-16-le")) // 2


class ParserRegistry:
    """Load and cache tree-sitter parsers per grammar."""

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def get_parser(self, language_id: str) -> Parser:
        """Return the parser for a language id.

        Args:
            language_id: ``javascriptreact`` or ``typescriptreact``.

        Returns:
            Cached tree-sitter parser.

        Raises:
            ParseFailure: If the language is unsupported or the grammar fails to load.
        """
        grammar = GRAMMAR_BY_LANGUAGE.get(language_id)
        if grammar is None:
            raise ParseFailure(f"Unsupported language: {language_id}")
        parser = self._parsers.get(grammar)
        if parser is not None:
            return parser
        try:
            parser = Parser(get_language(grammar))
        except (LookupError, OSError, RuntimeError, ValueError) as exc:
            raise ParseFailure(f"Failed to load {grammar} grammar: {exc}") from exc
        logger.debug(f"Loaded grammar (language_id={language_id} grammar={grammar})")
        self._parsers[grammar] = parser
        return parser

    def parse(self, source: str, language_id: str) -> SyntaxTree:
        """Parse source text into a syntax tree.

        A tree containing error or missing nodes is rejected as a whole.

        Raises:
            ParseFailure: If parsing fails or the tree contains syntax errors.
        """
        parser = self.get_parser(language_id)
        source_bytes = source.encode("utf-8")
        tree = parser.parse(source_bytes)
        if tree is None:
            raise ParseFailure("Parser returned no tree")
        root = tree.root_node
        if root.has_error:
            error_node = _first_error(root)
            if error_node is None:
                raise ParseFailure("Syntax error")
            raise ParseFailure(
                f"Syntax error at line {error_node.start_point[0] + 1}"
                f" column {error_node.start_point[1]}"
            )
        return SyntaxTree(
            root=root,
            language_id=language_id,
            lines=tuple(source_bytes.split(b"\n")),
        )


def _first_error(root: Node) -> Node | None:
    for node in walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def walk(node: Node) -> Iterator[Node]:
    """Yield a node and all of its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
