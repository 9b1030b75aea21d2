from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from litbook.core.errors import StructuralError
from litbook.syntax.tree import ElementKind, SyntaxTree

INDENT_CHARS = " \t"


@dataclass(frozen=True)
class Body:
    elements: Tuple[int, ...]
    prefix: str


def whitespace_prefix(line: str) -> Optional[str]:
    content = line.lstrip(INDENT_CHARS)
    if not content:
        return None
    return line[: len(line) - len(content)]


def longest_prefix(prefixes: Iterable[str]) -> str:
    prefixes = iter(prefixes)
    longest = next(prefixes, None)
    if longest is None:
        return ""
    for prefix in prefixes:
        size = min(len(longest), len(prefix))
        for position in range(size):
            if longest[position] != prefix[position]:
                size = position
                break
        longest = longest[:size]
    return longest


def shared_prefix(text: str) -> str:
    lines = (line.removesuffix("\r") for line in text.split("\n"))
    return longest_prefix(p for p in map(whitespace_prefix, lines) if p is not None)


def strip_lines(text: str, prefix: str) -> str:
    return "\n".join(line.removeprefix(prefix) for line in text.split("\n"))


def _expect(tree: SyntaxTree, index: Optional[int], expected: str) -> None:
    element = None if index is None else tree[index]
    if element is None or element.kind is not ElementKind.SUBSTANTIVE or element.type != expected:
        found = "nothing" if element is None else repr(element.type)
        raise StructuralError(f"Unexpected token: expected {expected!r}, found {found}")


def extract_body(tree: SyntaxTree, block: int) -> Body:
    """Strip the braces of ``block`` and measure its shared indentation."""
    children: Sequence[int] = tree.children(block)
    _expect(tree, children[0] if children else None, "{")
    _expect(tree, children[-1] if len(children) > 1 else None, "}")
    elements = tuple(children[1:-1])

    prefix = shared_prefix(tree.joined_text(elements))

    if elements and tree[elements[0]].kind is ElementKind.WHITESPACE:
        elements = elements[1:]

    return Body(elements=elements, prefix=prefix)
