# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for declarations, source ranges, and outline symbols."""

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from tree_sitter import Node

DeclarationKind = Literal[
    "function_component", "arrow_component", "class_component", "hook"
]


class SymbolKind(enum.IntEnum):
    """Host presentation kinds, numbered as the editor numbers them."""

    NAMESPACE = 3
    CLASS = 5
    FIELD = 8
    FUNCTION = 12


@dataclass(frozen=True)
class SourceSpan:
    """Represent a node location as reported by the parser.

    Attributes:
        start_line: Start line (1-based).
        start_column: Start column in UTF-16 code units (0-based).
        end_line: End line (1-based).
        end_column: End column in UTF-16 code units (0-based, exclusive).
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class Position:
    """Represent a host position (0-based line and character)."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """Represent a host range with an exclusive end position."""

    start: Position
    end: Position

    @classmethod
    def empty(cls) -> "Range":
        origin = Position(line=0, character=0)
        return cls(start=origin, end=origin)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


def to_range(span: SourceSpan | None) -> Range:
    """Convert a parser span to a host range.

    Args:
        span: Parser span with 1-based lines, or ``None`` if unknown.

    Returns:
        Host range with 0-based lines; a zero-width range at document start
        when the span is missing or invalid.
    """
    if span is None or span.start_line < 1 or span.end_line < 1:
        return Range.empty()
    return Range(
        start=Position(line=span.start_line - 1, character=span.start_column),
        end=Position(line=span.end_line - 1, character=span.end_column),
    )


@dataclass(frozen=True)
class Declaration:
    """Represent one classified top-level declaration.

    Attributes:
        kind: Declaration category.
        name: Declared name, or a fallback label when it has none.
        span: Source span of the declaration node.
        node: Declaration node (function, declarator, or class).
        body: Node holding the rendered output; ``None`` when not located.
    """

    kind: DeclarationKind
    name: str
    span: SourceSpan | None
    node: "Node"
    body: "Node | None"


@dataclass
class OutlineSymbol:
    """Represent one entry of the produced outline.

    Attributes:
        name: Display name (declaration name or markup tag).
        detail: Declaration description; empty for markup entries.
        kind: Presentation kind.
        range: Full source range.
        selection_range: Range revealed when the entry is selected.
        children: Child entries in document order.
    """

    name: str
    detail: str
    kind: SymbolKind
    range: Range
    selection_range: Range
    children: list["OutlineSymbol"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the subtree."""
        return {
            "name": self.name,
            "detail": self.detail,
            "kind": self.kind.name.lower(),
            "range": _range_to_dict(self.range),
            "selection_range": _range_to_dict(self.selection_range),
            "children": [child.to_dict() for child in self.children],
        }


def _range_to_dict(value: Range) -> dict[str, dict[str, int]]:
    return {
        "start": {"line": value.start.line, "character": value.start.character},
        "end": {"line": value.end.line, "character": value.end.character},
    }
