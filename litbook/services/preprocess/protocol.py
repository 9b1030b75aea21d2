"""mdBook preprocessor protocol.

mdBook writes ``[context, book]`` as JSON on stdin and expects the (possibly
modified) book back on stdout. Chapters whose source path looks like a Rust
file get their content replaced by the rendered ``fn body``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from litbook.core import logging as log
from litbook.core.errors import BuildError, ChapterError, LitbookError, ProtocolError
from litbook.core.utils import has_extension
from litbook.services.render.module import transform_module
from litbook.services.render.renderer import RenderOptions

PREPROCESSOR_NAME = "litbook"
SUPPORTED_MDBOOK = SpecifierSet(">=0.4,<0.5")
DEFAULT_EXTENSIONS = (".rs",)

logger = log.get_logger("litbook.preprocess")


def load_input(stream: TextIO) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Unable to parse the input: {e}") from e
    if (
        not isinstance(payload, list)
        or len(payload) != 2
        or not all(isinstance(part, dict) for part in payload)
    ):
        raise ProtocolError("Unable to parse the input: expected [context, book]")
    context, book = payload
    return context, book


def check_version(context: Dict[str, Any]) -> bool:
    """Warn when mdBook is not a version this preprocessor was written for."""
    raw = context.get("mdbook_version")
    try:
        ok = raw is not None and Version(str(raw)) in SUPPORTED_MDBOOK
    except InvalidVersion:
        ok = False
    if not ok:
        logger.warning(
            "mdBook version (%s) doesn't match the supported range (%s)", raw, SUPPORTED_MDBOOK
        )
    return ok


def settings(context: Dict[str, Any], name: str = PREPROCESSOR_NAME) -> Dict[str, Any]:
    config = context.get("config") or {}
    return dict((config.get("preprocessor") or {}).get(name) or {})


def _sections(container: Dict[str, Any]) -> List[Any]:
    for key in ("sections", "items", "sub_items"):
        if isinstance(container.get(key), list):
            return container[key]
    return []


def iter_chapters(container: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
    for item in _sections(container):
        if not isinstance(item, dict) or "Chapter" not in item:
            # "Separator" and {"PartTitle": ...}
            continue
        chapter = item["Chapter"]
        yield chapter
        yield from iter_chapters(chapter)


def process_book(
    book: Dict[str, Any],
    options: Optional[RenderOptions] = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[LitbookError]:
    errors: List[LitbookError] = []
    for chapter in iter_chapters(book):
        path = chapter.get("path")
        if not path or not has_extension(path, extensions):
            continue
        try:
            content = transform_module(chapter.get("content") or "", options)
        except LitbookError as e:
            logger.debug("chapter %s failed: %s", path, e)
            errors.append(ChapterError(path, e))
            continue
        if content is not None:
            chapter["content"] = content
            logger.debug("rendered chapter %s", path)
    return errors


def run(stdin: TextIO, stdout: TextIO, name: str = PREPROCESSOR_NAME) -> None:
    context, book = load_input(stdin)
    check_version(context)
    table = settings(context, name)
    options = RenderOptions.from_mapping(table)
    extensions = table.get("extensions") or DEFAULT_EXTENSIONS
    if isinstance(extensions, str):
        extensions = (extensions,)
    errors = process_book(book, options, extensions)
    if errors:
        raise BuildError(errors)
    json.dump(book, stdout)
