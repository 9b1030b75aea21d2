from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from litbook.core import config
from litbook.core import logging as log
from litbook.core.errors import BuildError, ConfigError, FileAccessError, LitbookError
from litbook.core.utils import module_candidates, owned_dir
from litbook.services.render.module import BODY_FUNCTION
from litbook.services.render.renderer import RenderOptions, render
from litbook.syntax import rust
from litbook.syntax.tree import SyntaxTree

logger = log.get_logger("litbook.book")


@dataclass
class BookConfig:
    source_dir: Path
    out_dir: Path
    entry: str = "lib.rs"
    recursive: bool = True
    public_only: bool = True
    options: RenderOptions = field(default_factory=RenderOptions)

    @classmethod
    def from_env(
        cls,
        source_dir: Optional[Path] = None,
        out_dir: Optional[Path] = None,
        **overrides,
    ) -> "BookConfig":
        """Locate sources and output the way a cargo build script sees them.

        Only the directories not given explicitly are read from the environment.
        """
        if source_dir is None:
            source_dir = _env_dir("CARGO_MANIFEST_DIR") / "src"
        if out_dir is None:
            out_dir = _env_dir("OUT_DIR") / "rust-book"
        return cls(source_dir=source_dir, out_dir=out_dir, **overrides)


def _env_dir(key: str) -> Path:
    value = config.get(key)
    if not value:
        raise ConfigError(f"environment variable {key} is not set")
    return Path(value)


@dataclass
class Page:
    """A Rust module; its `fn body` becomes one Markdown file."""
    tree: SyntaxTree
    container: int
    modules: Tuple[str, ...]
    module_dir: Path


class BookBuilder:
    def __init__(self, cfg: BookConfig):
        self.config = cfg
        self.errors: List[LitbookError] = []
        self.written: List[Path] = []

    def build(self) -> List[Path]:
        self.errors, self.written = [], []
        self._file(self.config.source_dir / self.config.entry, ())
        if self.errors:
            raise BuildError(self.errors)
        return self.written

    def target(self, modules: Tuple[str, ...]) -> Path:
        if not modules:
            return self.config.out_dir / Path(self.config.entry).with_suffix(".md").name
        return self.config.out_dir.joinpath(*modules).with_suffix(".md")

    def _file(self, path: Path, modules: Tuple[str, ...]) -> None:
        try:
            try:
                source = path.read_text(encoding="utf-8")
            except OSError as e:
                raise FileAccessError(f"cannot read {path}: {e}") from e
            tree = rust.parse(source)
        except LitbookError as e:
            self.errors.append(e)
            return
        logger.debug("parsed %s", path)
        self._page(Page(tree, tree.root, modules, owned_dir(path)))

    def _page(self, page: Page) -> None:
        try:
            self._write(page)
        except LitbookError as e:
            self.errors.append(e)

        for item in rust.items(page.tree, page.container):
            if page.tree[item].type != "mod_item" or not rust.is_public(page.tree, item):
                continue
            module = rust.item_name(page.tree, item)
            if not self.config.recursive:
                logger.warning("skipping nested module %s", "::".join(page.modules + (module,)))
                continue
            self._module(page, item, module)

    def _module(self, page: Page, item: int, module: str) -> None:
        modules = page.modules + (module,)
        inline = rust.module_body(page.tree, item)
        if inline is not None:
            self._page(Page(page.tree, inline, modules, page.module_dir / module))
            return

        path = next((p for p in module_candidates(page.module_dir, module) if p.is_file()), None)
        if path is None:
            self.errors.append(
                FileAccessError(f"file not found for module {module} in {page.module_dir}")
            )
            return
        self._file(path, modules)

    def _write(self, page: Page) -> Optional[Path]:
        function = rust.find_function(
            page.tree, BODY_FUNCTION, page.container, public_only=self.config.public_only
        )
        if function is None:
            return None
        markdown = render(page.tree, rust.function_body(page.tree, function), self.config.options)

        target = self.target(page.modules)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("w", encoding="utf-8") as out:
                out.write(markdown)
        except OSError as e:
            raise FileAccessError(f"cannot write {target}: {e}") from e
        logger.debug("wrote %s", target)
        self.written.append(target)
        return target
