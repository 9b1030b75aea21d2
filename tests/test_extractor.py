import pytest
from litbook.core.errors import StructuralError
from litbook.services.render.extractor import (
    extract_body,
    longest_prefix,
    shared_prefix,
    strip_lines,
    whitespace_prefix,
)
from litbook.syntax import rust
from litbook.syntax.tree import Element, ElementKind, SyntaxTree


def test_whitespace_prefix():
    assert whitespace_prefix("    let x;") == "    "
    assert whitespace_prefix("\t let x;") == "\t "
    assert whitespace_prefix("let x;") == ""
    assert whitespace_prefix("   ") is None
    assert whitespace_prefix("") is None


def test_longest_prefix():
    assert longest_prefix([]) == ""
    assert longest_prefix(["    "]) == "    "
    assert longest_prefix(["    ", "      ", "    "]) == "    "
    assert longest_prefix(["    ", "  \t"]) == "  "
    assert longest_prefix(["\t\t", "\t"]) == "\t"
    assert longest_prefix(["  ", ""]) == ""


def test_shared_prefix_ignores_blank_lines():
    text = "\n    let x = 1;\n\n      x + 1\n    // done\n"
    assert shared_prefix(text) == "    "


def test_deindent_is_idempotent():
    text = "    a\n      b\n\n    c"
    stripped = strip_lines(text, shared_prefix(text))
    assert stripped == "a\n  b\n\nc"
    assert shared_prefix(stripped) == ""
    assert strip_lines(stripped, shared_prefix(stripped)) == stripped


def test_extract_body_trims_braces_and_leading_whitespace():
    tree = rust.parse("fn body() {\n    let x = 1;\n}\n")
    body = extract_body(tree, rust.function_body(tree, rust.find_function(tree, "body")))
    assert body.prefix == "    "
    assert tree[body.elements[0]].type == "let_declaration"
    assert tree.text(body.elements[-1]) == "\n"


def test_extract_empty_body():
    tree = rust.parse("fn body() {}\n")
    body = extract_body(tree, rust.function_body(tree, rust.find_function(tree, "body")))
    assert body.elements == ()
    assert body.prefix == ""


def _block(source: bytes, *parts):
    """Hand-built block node from (kind, type, start, end) tuples."""
    elements = [Element(kind, type_, start, end) for kind, type_, start, end in parts]
    block = Element(ElementKind.NODE, "block", 0, len(source), tuple(range(len(elements))))
    return SyntaxTree(source=source, elements=tuple(elements + [block]), root=len(elements))


def test_missing_closing_brace_is_structural_error():
    tree = _block(
        b"{ x",
        (ElementKind.SUBSTANTIVE, "{", 0, 1),
        (ElementKind.WHITESPACE, "whitespace", 1, 2),
        (ElementKind.SUBSTANTIVE, "identifier", 2, 3),
    )
    with pytest.raises(StructuralError):
        extract_body(tree, tree.root)


def test_empty_block_is_structural_error():
    tree = _block(b"")
    with pytest.raises(StructuralError):
        extract_body(tree, tree.root)
