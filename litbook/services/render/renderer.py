"""Markdown rendering of a function body.

Plain comments become prose; everything else (statements, nested items and
doc comments) is shown as fenced code. Blank lines between paragraphs and
between statements survive, horizontal indentation is taken off using the
body's shared prefix.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from litbook.services.render.comments import normalize_comment
from litbook.services.render.extractor import extract_body, strip_lines
from litbook.syntax.tree import Element, ElementKind, SyntaxTree

FENCE = "```"


@dataclass(frozen=True)
class RenderOptions:
    language: str = "rust"
    ignore: bool = False

    @property
    def fence_open(self) -> str:
        info = f"{self.language},ignore" if self.ignore else self.language
        return f"{FENCE}{info}"

    @classmethod
    def from_mapping(cls, table: Optional[Mapping[str, Any]]) -> "RenderOptions":
        table = table or {}
        return cls(
            language=str(table.get("language", cls.language)),
            ignore=bool(table.get("ignore", cls.ignore)),
        )


@dataclass
class RenderState:
    in_code_block: bool = False
    pending_whitespace: str = ""
    output: List[str] = field(default_factory=list)

    def emit(self, text: str) -> None:
        self.output.append(text)


class BodyRenderer:
    def __init__(self, tree: SyntaxTree, prefix: str, options: Optional[RenderOptions] = None):
        self.tree = tree
        self.prefix = prefix
        self.options = options or RenderOptions()

    def render(self, elements: Iterable[int]) -> str:
        state = RenderState()
        for index in elements:
            self._element(state, index)
        if state.in_code_block:
            state.emit(f"\n{FENCE}")
        state.emit("\n")
        return "".join(state.output)

    def _enter_code(self, state: RenderState) -> None:
        if state.in_code_block:
            state.emit(state.pending_whitespace)
        else:
            state.emit(f"\n\n{self.options.fence_open}\n")
        state.in_code_block = True

    def _enter_prose(self, state: RenderState) -> None:
        if state.in_code_block:
            state.emit(f"\n{FENCE}\n\n")
        else:
            state.emit(state.pending_whitespace)
        state.in_code_block = False

    def _code(self, index: int) -> str:
        return strip_lines(self.tree.text(index), self.prefix)

    def _element(self, state: RenderState, index: int) -> None:
        element = self.tree[index]
        if element.is_node:
            self._node(state, element)
        else:
            self._token(state, index, element)

    def _node(self, state: RenderState, element: Element) -> None:
        children = iter(element.children)
        # Only trivia at the top of a node can turn into prose.
        for child in children:
            if self.tree[child].is_trivia:
                self._token(state, child, self.tree[child])
            else:
                self._enter_code(state)
                state.emit(self._code(child))
                break
        for child in children:
            state.emit(self._code(child))
        state.pending_whitespace = ""

    def _token(self, state: RenderState, index: int, element: Element) -> None:
        if element.kind is ElementKind.WHITESPACE:
            state.pending_whitespace = "\n" * self.tree.text(index).count("\n")
            return
        if element.kind is ElementKind.COMMENT and not element.is_doc:
            self._enter_prose(state)
            state.emit(normalize_comment(self.tree.text(index), element.shape, self.prefix))
        else:
            self._enter_code(state)
            state.emit(self._code(index))
        state.pending_whitespace = ""


def render(tree: SyntaxTree, block: int, options: Optional[RenderOptions] = None) -> str:
    """Render the body of the ``{ ... }`` block at ``block`` as Markdown."""
    body = extract_body(tree, block)
    return BodyRenderer(tree, body.prefix, options).render(body.elements)
