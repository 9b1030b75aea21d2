from litbook.services.render.comments import normalize_comment
from litbook.syntax.tree import CommentShape


def test_line_comment_loses_marker_and_one_space():
    assert normalize_comment("// Title text", CommentShape.LINE, "    ") == "Title text"
    assert normalize_comment("//  extra space", CommentShape.LINE, "    ") == " extra space"
    assert normalize_comment("//no-space", CommentShape.LINE, "    ") == "no-space"
    assert normalize_comment("//# text", CommentShape.LINE, "    ") == "# text"
    assert normalize_comment("//", CommentShape.LINE, "    ") == ""


def test_tab_after_marker_is_kept():
    assert normalize_comment("//\tcode", CommentShape.LINE, "") == "\tcode"


def test_block_comment_lines_are_deindented():
    text = "/* First line\n    second line\n      indented\n  short */"
    assert normalize_comment(text, CommentShape.BLOCK, "    ") == (
        "First line\nsecond line\n  indented\n  short "
    )


def test_unterminated_block_text_is_kept():
    assert normalize_comment("/* open", CommentShape.BLOCK, "") == "open"
