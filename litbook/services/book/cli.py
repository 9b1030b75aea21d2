from pathlib import Path
from typing import Optional
import typer
from rich import print
from rich.console import Console
from rich.table import Table
from litbook.core import logging as log
from litbook.core.errors import BuildError, LitbookError
from litbook.services.render.renderer import RenderOptions
from .builder import BookBuilder, BookConfig

app = typer.Typer(help="Build Markdown pages from a crate's `fn body` functions")

@app.command("run")
def run(
    source_dir: Optional[Path] = typer.Option(None, "--source-dir", file_okay=False, help="Crate src/ directory (default: $CARGO_MANIFEST_DIR/src)"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", file_okay=False, help="Output directory (default: $OUT_DIR/rust-book)"),
    entry: str = typer.Option("lib.rs", "--entry", help="Root module file"),
    recursive: bool = typer.Option(True, "--recursive/--no-recursive", help="Descend into public sub-modules"),
    all_items: bool = typer.Option(False, "--all-items", help="Also render private `fn body` functions"),
    ignore: bool = typer.Option(False, "--ignore/--no-ignore", help="Mark code fences as not tested"),
):
    _ = log.setup()
    err = Console(stderr=True)
    settings = dict(
        entry=entry,
        recursive=recursive,
        public_only=not all_items,
        options=RenderOptions(ignore=ignore),
    )
    try:
        cfg = BookConfig.from_env(source_dir=source_dir, out_dir=out_dir, **settings)
        written = BookBuilder(cfg).build()
    except BuildError as e:
        for error in e.errors:
            err.print(str(error), markup=False, highlight=False)
        raise typer.Exit(code=1)
    except LitbookError as e:
        err.print(str(e), markup=False, highlight=False)
        raise typer.Exit(code=1)

    if not written:
        print("• No `fn body` found.")
        return
    table = Table(title=f"Pages written to {cfg.out_dir}")
    table.add_column("Page")
    for path in written:
        table.add_row(str(path.relative_to(cfg.out_dir)))
    print(table)
