# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for markup projection: depth, fragments, and unwrapping."""

import logging

from rco import naming
from rco.model import SymbolKind
from rco.syntax import MalformedNodeError


def _shape(symbols) -> list[tuple[str, list]]:
    return [(symbol.name, _shape(symbol.children)) for symbol in symbols]


def _max_markup_depth(symbols, depth: int = 0) -> int:
    deepest = -1
    for symbol in symbols:
        deepest = max(deepest, depth, _max_markup_depth(symbol.children, depth + 1))
    return deepest


def test_out_001_arrow_component_with_expression_body(outline) -> None:
    source = "const Button = ({label}) => (<button><span>{label}</span></button>)"

    symbols = outline(source, max_depth=2)

    assert _shape(symbols) == [("Button", [("button", [("span", [])])])]
    assert symbols[0].detail == "Function Component"


def test_out_002_class_component_cut_at_max_depth(outline) -> None:
    source = (
        "class TodoList extends React.Component { render() { "
        "return <div><h1/><ul><li/><li/></ul></div> } }"
    )

    symbols = outline(source, max_depth=2)

    assert _shape(symbols) == [("TodoList", [("div", [("h1", []), ("ul", [])])])]
    assert symbols[0].detail == "Class Component"


def test_out_003_logical_and_renders_right_operand_as_child(outline) -> None:
    source = "const C = ({x}) => <div>{x && <span/>}</div>"

    assert _shape(outline(source)) == [("C", [("div", [("span", [])])])]


def test_out_004_hook_never_gets_markup_children(outline) -> None:
    source = "\n".join(
        [
            "function useThing(){ return {} }",
            "function useView(){ return <div><p/></div> }",
        ]
    )

    symbols = outline(source)

    assert _shape(symbols) == [("useThing", []), ("useView", [])]
    assert [symbol.detail for symbol in symbols] == ["Hook", "Hook"]


def test_out_005_nested_function_is_independent_entry(outline) -> None:
    source = "\n".join(
        [
            "function outer() {",
            "  function Nested() { return <nav><a /></nav>; }",
            "  return Nested;",
            "}",
        ]
    )

    assert _shape(outline(source)) == [("Nested", [("nav", [("a", [])])])]


def test_out_006_zero_and_negative_depth_emit_no_markup(outline) -> None:
    source = "function App() { return <main><section /></main>; }"

    assert _shape(outline(source, max_depth=0)) == [("App", [])]
    assert _shape(outline(source, max_depth=-1)) == [("App", [])]


def test_out_007_no_markup_node_reaches_max_depth(outline) -> None:
    source = "\n".join(
        [
            "const Deep = () => (",
            "  <a><b><c><d><e>{ok && <f><g /></f>}</e></d></c></b></a>",
            ");",
        ]
    )

    for max_depth in range(0, 8):
        symbols = outline(source, max_depth=max_depth)
        assert _max_markup_depth(symbols[0].children) < max_depth

    assert _shape(outline(source, max_depth=3)) == [
        ("Deep", [("a", [("b", [("c", [])])])])
    ]


def test_out_008_embedded_markup_keeps_literal_child_depth(outline) -> None:
    source = "const C = ({x}) => <div>{x && <span><b /></span>}<p><i /></p></div>"

    assert _shape(outline(source, max_depth=2)) == [
        ("C", [("div", [("span", []), ("p", [])])])
    ]


def test_out_009_fragment_toggle_adds_one_wrapping_level(outline) -> None:
    source = "const F = () => (<><h1>Title</h1><p><em /></p></>)"

    shown = outline(source, max_depth=3, show_fragments=True)
    hidden = outline(source, max_depth=2, show_fragments=False)

    assert _shape(shown) == [
        ("F", [("<Fragment>", [("h1", []), ("p", [("em", [])])])])
    ]
    assert _shape(hidden) == [("F", [("h1", []), ("p", [("em", [])])])]
    assert shown[0].children[0].kind is SymbolKind.NAMESPACE


def test_out_010_hidden_fragment_does_not_consume_depth(outline) -> None:
    source = "const L = () => <div><><span><b /></span></></div>"

    assert _shape(outline(source, max_depth=2, show_fragments=False)) == [
        ("L", [("div", [("span", [])])])
    ]
    assert _shape(outline(source, max_depth=2, show_fragments=True)) == [
        ("L", [("div", [("<Fragment>", [])])])
    ]


def test_out_011_nested_hidden_fragments_flatten(outline) -> None:
    source = "const N = () => <><><a /></>{ok && <><b /></>}</>"

    assert _shape(outline(source, show_fragments=False)) == [
        ("N", [("a", []), ("b", [])])
    ]


def test_out_012_ternary_branches_become_siblings(outline) -> None:
    source = "\n".join(
        [
            "const T = ({ isLoggedIn }: { isLoggedIn: boolean }) => (",
            "  <div>",
            "    {isLoggedIn ? <span>Welcome!</span> : <em>Please login</em>}",
            "    {isLoggedIn ? (<Logout />) : null}",
            "  </div>",
            ");",
        ]
    )

    assert _shape(outline(source)) == [
        ("T", [("div", [("span", []), ("em", []), ("Logout", [])])])
    ]


def test_out_013_other_logical_operators_are_unwrapped(outline) -> None:
    source = "const O = ({a, b}) => <div>{a || <Empty />}{b ?? <Loading />}</div>"

    assert _shape(outline(source)) == [
        ("O", [("div", [("Empty", []), ("Loading", [])])])
    ]


def test_out_014_map_callbacks_yield_one_representative(outline) -> None:
    source = "\n".join(
        [
            "function List({ items }) {",
            "  return (",
            "    <ul>",
            "      {items.map(item => <li key={item.id}>{item.name}</li>)}",
            "      {items.map((item) => {",
            "        const label = item.name.toUpperCase();",
            "        return (<Row label={label} />);",
            "      })}",
            "      {items.map(function (item) { return <><dt /><dd /></>; })}",
            "    </ul>",
            "  );",
            "}",
        ]
    )

    assert _shape(outline(source, max_depth=3)) == [
        (
            "List",
            [
                (
                    "ul",
                    [
                        ("li", []),
                        ("Row", []),
                        ("<Fragment>", [("dt", []), ("dd", [])]),
                    ],
                )
            ],
        )
    ]


def test_out_015_unsupported_expressions_produce_nothing(outline) -> None:
    source = "\n".join(
        [
            "const X = ({ a, rows }) => (",
            "  <div>",
            "    {/* a comment */}",
            "    {}",
            "    {a}",
            "    {renderRows(rows)}",
            "    {[<i key=\"1\" />]}",
            "    plain text",
            "  </div>",
            ");",
        ]
    )

    assert _shape(outline(source, language_id="javascriptreact")) == [
        ("X", [("div", [])])
    ]


def test_out_016_markup_behind_wrappers_is_top_level(outline) -> None:
    source = "\n".join(
        [
            "function Gate({ ok, items }) {",
            "  const header = <h1>Header</h1>;",
            "  if (!ok) {",
            "    return <Spinner />;",
            "  }",
            "  return ok ? <main>{header}</main> : <aside />;",
            "}",
        ]
    )

    assert _shape(outline(source)) == [
        ("Gate", [("h1", []), ("Spinner", []), ("main", []), ("aside", [])])
    ]


def test_out_017_markup_presentation_kinds(outline) -> None:
    source = "const K = () => <><Layout.Header /><motion.div /><svg:rect /></>"

    symbols = outline(source, language_id="javascriptreact", max_depth=3)
    fragment = symbols[0].children[0]

    assert [(child.name, child.kind) for child in fragment.children] == [
        ("Layout.Header", SymbolKind.CLASS),
        ("motion.div", SymbolKind.FIELD),
        ("svg:rect", SymbolKind.FIELD),
    ]
    assert fragment.detail == ""


def test_out_018_markup_ranges_follow_source(outline) -> None:
    source = "\n".join(
        [
            "function Header() {",
            "  return (",
            "    <header>",
            "      <h1>My App</h1>",
            "    </header>",
            "  );",
            "}",
        ]
    )

    symbols = outline(source)
    header = symbols[0].children[0]
    title = header.children[0]

    assert (symbols[0].range.start.line, symbols[0].range.start.character) == (0, 0)
    assert (symbols[0].range.end.line, symbols[0].range.end.character) == (6, 1)
    assert (header.range.start.line, header.range.start.character) == (2, 4)
    assert (header.range.end.line, header.range.end.character) == (4, 13)
    assert (title.range.start.line, title.range.start.character) == (3, 6)
    assert title.selection_range == title.range


def test_out_019_repeated_runs_are_identical(outline) -> None:
    source = "\n".join(
        [
            "const Card = () => <div><h2 /><p /></div>;",
            "function useData() { return []; }",
            "class Board extends Component { render() { return <table />; } }",
        ]
    )

    assert outline(source) == outline(source)


def _reject_tag(monkeypatch, rejected: str) -> None:
    def _markup_tag(node):
        tag = naming.markup_tag(node)
        if tag == rejected:
            raise MalformedNodeError(f"Unreadable tag (tag={tag})")
        return tag

    monkeypatch.setattr("rco.outline.markup_tag", _markup_tag)


def test_out_020_malformed_child_is_skipped_siblings_kept(
    outline, monkeypatch, caplog
) -> None:
    _reject_tag(monkeypatch, "bad")

    with caplog.at_level(logging.WARNING, logger="rco.outline"):
        symbols = outline("const A = () => <div><bad /><ok /></div>;")

    assert _shape(symbols) == [("A", [("div", [("ok", [])])])]
    assert "Skipping markup child" in caplog.text


def test_out_021_malformed_top_level_markup_is_skipped(
    outline, monkeypatch, caplog
) -> None:
    _reject_tag(monkeypatch, "bad")

    with caplog.at_level(logging.WARNING, logger="rco.outline"):
        symbols = outline(
            "function A({ x }) { if (x) { return <bad />; } return <ok />; }\n"
            "const B = () => <main />;"
        )

    assert _shape(symbols) == [("A", [("ok", [])]), ("B", [("main", [])])]
    assert "Skipping markup subtree (parent=A" in caplog.text
