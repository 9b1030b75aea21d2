"""Read-only element arena over a parsed source file.

Elements are addressed by their index in ``SyntaxTree.elements``; nodes list
the indices of their children instead of holding references to them. Every
element borrows a byte span of ``SyntaxTree.source`` and concatenating the
text of a node's children gives back the node's own text.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class ElementKind(Enum):
    NODE = "node"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    SUBSTANTIVE = "substantive"


class CommentShape(Enum):
    LINE = "line"
    BLOCK = "block"


class DocPlacement(Enum):
    OUTER = "outer"
    INNER = "inner"


# Longest markers first: "////" and "/***" are plain comments.
_COMMENT_MARKERS: Tuple[Tuple[str, CommentShape, Optional[DocPlacement]], ...] = (
    ("/**/", CommentShape.BLOCK, None),
    ("/***", CommentShape.BLOCK, None),
    ("/**", CommentShape.BLOCK, DocPlacement.OUTER),
    ("/*!", CommentShape.BLOCK, DocPlacement.INNER),
    ("////", CommentShape.LINE, None),
    ("///", CommentShape.LINE, DocPlacement.OUTER),
    ("//!", CommentShape.LINE, DocPlacement.INNER),
    ("/*", CommentShape.BLOCK, None),
    ("//", CommentShape.LINE, None),
)


def classify_comment(text: str) -> Tuple[CommentShape, Optional[DocPlacement]]:
    for marker, shape, doc in _COMMENT_MARKERS:
        if text.startswith(marker):
            return shape, doc
    raise ValueError(f"not a comment: {text[:8]!r}")


def comment_marker(text: str) -> str:
    """Introducing marker of a comment: ``//``, ``///``, ``/*!`` ..."""
    shape, doc = classify_comment(text)
    if doc is None:
        return "//" if shape is CommentShape.LINE else "/*"
    if shape is CommentShape.LINE:
        return "///" if doc is DocPlacement.OUTER else "//!"
    return "/**" if doc is DocPlacement.OUTER else "/*!"


@dataclass(frozen=True)
class Element:
    kind: ElementKind
    type: str
    start: int
    end: int
    children: Tuple[int, ...] = ()
    shape: Optional[CommentShape] = None
    doc: Optional[DocPlacement] = None

    @property
    def is_node(self) -> bool:
        return self.kind is ElementKind.NODE

    @property
    def is_trivia(self) -> bool:
        return self.kind in (ElementKind.COMMENT, ElementKind.WHITESPACE)

    @property
    def is_doc(self) -> bool:
        return self.doc is not None


@dataclass(frozen=True)
class SyntaxTree:
    source: bytes
    elements: Tuple[Element, ...]
    root: int

    def __getitem__(self, index: int) -> Element:
        return self.elements[index]

    def text(self, index: int) -> str:
        element = self.elements[index]
        return self.source[element.start:element.end].decode("utf-8")

    def children(self, index: int) -> Sequence[int]:
        return self.elements[index].children

    def joined_text(self, indices: Sequence[int]) -> str:
        return "".join(self.text(i) for i in indices)
