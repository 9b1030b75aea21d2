from litbook.syntax.tree import CommentShape, comment_marker


def normalize_comment(text: str, shape: CommentShape, prefix: str) -> str:
    """Turn a plain comment into Markdown text.

    The marker goes away, as does the closing ``*/`` of a block comment. The
    first line loses a single leading space; the following lines lose the
    shared indentation when they start with it and are kept as written
    otherwise.
    """
    content = text[len(comment_marker(text)):]
    if shape is CommentShape.BLOCK:
        content = content.removesuffix("*/")

    first, *rest = content.split("\n")
    lines = [first.removeprefix(" ")]
    lines.extend(line.removeprefix(prefix) for line in rest)
    return "\n".join(lines)
