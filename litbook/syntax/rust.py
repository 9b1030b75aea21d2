"""Rust front end: tree-sitter parse tree -> :class:`SyntaxTree` arena."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterator, List, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from litbook.core.errors import Diagnostic, ParseError
from litbook.syntax.tree import (
    DocPlacement,
    Element,
    ElementKind,
    SyntaxTree,
    classify_comment,
)

RUST = Language(tree_sitter_rust.language())

COMMENT_TYPES = {"line_comment", "block_comment"}
ATOMIC_TYPES = COMMENT_TYPES | {"string_literal", "raw_string_literal", "char_literal"}

# Items that own the comments written directly above them.
ATTACHING_TYPES = {
    "const_item",
    "enum_item",
    "extern_crate_declaration",
    "function_item",
    "function_signature_item",
    "impl_item",
    "macro_definition",
    "mod_item",
    "static_item",
    "struct_item",
    "trait_item",
    "type_item",
    "union_item",
    "use_declaration",
}


def parse(source: str) -> SyntaxTree:
    data = source.encode("utf-8")
    ts_tree = Parser(RUST).parse(data)
    diagnostics = list(_diagnostics(ts_tree.root_node, data))
    if diagnostics:
        raise ParseError(diagnostics)
    builder = _Builder(data)
    root = builder.node(ts_tree.root_node, 0, len(data))
    return SyntaxTree(source=data, elements=tuple(builder.elements), root=root)


def _diagnostics(node: Node, data: bytes) -> Iterator[Diagnostic]:
    line, column = node.start_point[0] + 1, node.start_point[1] + 1
    if node.is_missing:
        yield Diagnostic(line, column, f"expected {node.type}")
    elif node.type == "ERROR":
        snippet = data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
        snippet = snippet.strip().splitlines()[0] if snippet.strip() else snippet
        yield Diagnostic(line, column, f"syntax error near {snippet[:40]!r}")
    elif node.has_error:
        for child in node.children:
            yield from _diagnostics(child, data)


class _Builder:
    def __init__(self, source: bytes):
        self.source = source
        self.elements: List[Element] = []

    def _add(self, element: Element) -> int:
        self.elements.append(element)
        return len(self.elements) - 1

    def build(self, node: Node) -> int:
        if node.type in COMMENT_TYPES:
            return self.comment(node)
        if node.child_count == 0 or node.type in ATOMIC_TYPES:
            return self._add(
                Element(ElementKind.SUBSTANTIVE, node.type, node.start_byte, node.end_byte)
            )
        return self.node(node, node.start_byte, node.end_byte)

    def comment(self, node: Node) -> int:
        start, end = node.start_byte, node.end_byte
        # the line break belongs to the whitespace that follows
        while end > start and self.source[end - 1:end] in (b"\n", b"\r"):
            end -= 1
        shape, doc = classify_comment(self.source[start:end].decode("utf-8"))
        return self._add(
            Element(ElementKind.COMMENT, node.type, start, end, shape=shape, doc=doc)
        )

    def gap(self, start: int, end: int) -> int:
        if self.source[start:end].strip():
            return self._add(Element(ElementKind.SUBSTANTIVE, "text", start, end))
        return self._add(Element(ElementKind.WHITESPACE, "whitespace", start, end))

    def node(self, node: Node, start: int, end: int) -> int:
        children: List[int] = []
        cursor = start
        for child in node.children:
            if child.end_byte <= child.start_byte:
                continue
            if child.start_byte > cursor:
                children.append(self.gap(cursor, child.start_byte))
            index = self.build(child)
            if self.elements[index].type in ATTACHING_TYPES:
                children = self.attach(children, index)
            children.append(index)
            cursor = self.elements[index].end
        if end > cursor:
            children.append(self.gap(cursor, end))
        return self._add(Element(ElementKind.NODE, node.type, start, end, tuple(children)))

    def attach(self, siblings: List[int], index: int) -> List[int]:
        """Move leading attributes and comments of ``index`` into it."""
        cut = len(siblings)
        scan = cut
        while scan > 0:
            element = self.elements[siblings[scan - 1]]
            if element.type == "attribute_item":
                cut = scan - 1
            elif not element.is_trivia:
                break
            scan -= 1

        run: List[int] = []
        scan = cut
        while scan > 0 and self.elements[siblings[scan - 1]].is_trivia:
            run.append(siblings[scan - 1])
            scan -= 1
        cut -= self._attached_trivia(run)

        if cut == len(siblings):
            return siblings
        item = self.elements[index]
        moved = tuple(siblings[cut:])
        self.elements[index] = replace(
            item, start=self.elements[moved[0]].start, children=moved + item.children
        )
        return siblings[:cut]

    def _attached_trivia(self, run: List[int]) -> int:
        # ``run`` is ordered nearest first
        count = 0
        trivia = [self.elements[i] for i in run]
        for position, element in enumerate(trivia):
            if element.kind is ElementKind.WHITESPACE:
                if self.source[element.start:element.end].count(b"\n") > 1:
                    following = trivia[position + 1] if position + 1 < len(trivia) else None
                    if following is not None and following.doc is DocPlacement.OUTER:
                        continue
                    break
            elif element.kind is ElementKind.COMMENT:
                if element.doc is DocPlacement.INNER:
                    break
                count = position + 1
        return count


def items(tree: SyntaxTree, container: int) -> Iterator[int]:
    for index in tree.children(container):
        if tree[index].is_node:
            yield index


def _child_of_type(tree: SyntaxTree, item: int, type_name: str) -> Optional[int]:
    for index in tree.children(item):
        if tree[index].type == type_name:
            return index
    return None


def item_name(tree: SyntaxTree, item: int) -> Optional[str]:
    name = _child_of_type(tree, item, "identifier")
    return None if name is None else tree.text(name)


def is_public(tree: SyntaxTree, item: int) -> bool:
    visibility = _child_of_type(tree, item, "visibility_modifier")
    return visibility is not None and tree.text(visibility).strip() == "pub"


def function_body(tree: SyntaxTree, item: int) -> Optional[int]:
    if tree[item].type != "function_item":
        return None
    return _child_of_type(tree, item, "block")


def module_body(tree: SyntaxTree, item: int) -> Optional[int]:
    if tree[item].type != "mod_item":
        return None
    return _child_of_type(tree, item, "declaration_list")


def find_function(
    tree: SyntaxTree,
    name: str,
    container: Optional[int] = None,
    public_only: bool = False,
) -> Optional[int]:
    """First function item called ``name`` that has a body."""
    container = tree.root if container is None else container
    for item in items(tree, container):
        if tree[item].type != "function_item" or item_name(tree, item) != name:
            continue
        if public_only and not is_public(tree, item):
            continue
        if function_body(tree, item) is not None:
            return item
    return None
