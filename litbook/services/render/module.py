from __future__ import annotations
from typing import Optional

from litbook.services.render.renderer import RenderOptions, render
from litbook.syntax import rust

BODY_FUNCTION = "body"


def transform_module(source: str, options: Optional[RenderOptions] = None) -> Optional[str]:
    """Markdown for the first top-level ``fn body``, or None without one."""
    tree = rust.parse(source)
    function = rust.find_function(tree, BODY_FUNCTION)
    if function is None:
        return None
    return render(tree, rust.function_body(tree, function), options)
