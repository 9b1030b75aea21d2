import sys
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from litbook.core.logging import setup as setup_logging
from litbook.services.preprocess.cli import preprocess, supports
from litbook.services.render.cli import app as render_app
from litbook.services.book.cli import app as book_app

setup_logging()

app = typer.Typer(help="litbook – literate Rust chapters for mdBook")

@app.callback(invoke_without_command=True)
def root(ctx: typer.Context):
    if ctx.invoked_subcommand is None:
        preprocess()

app.command("supports", help="Tell mdBook which renderers are supported")(supports)
app.add_typer(render_app, name="render", help="Render one Rust file")
app.add_typer(book_app, name="book", help="Build pages from a crate's module tree")

def usage(exe: str, args: List[str]) -> None:
    Console(stderr=True).print(
        f"Invalid arguments: {' '.join(args)}\n"
        "\n"
        "Usage:\n"
        f"    {exe}\n"
        f"    {exe} supports [OUTPUT_FORMAT]\n"
        f"    {exe} render run SOURCE [--out PATH]\n"
        f"    {exe} book run [--source-dir DIR] [--out-dir DIR]",
        markup=False,
        highlight=False,
    )

USAGE_EXIT = 2

def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    args = list(sys.argv[1:] if argv is None else argv)
    exe = Path(sys.argv[0]).name if argv is None else "mdbook-litbook"
    try:
        app(args=args, prog_name=exe)
    except SystemExit as e:
        code = e.code if isinstance(e.code, int) else (0 if e.code is None else 1)
        # usage errors exit with 2 in standalone mode
        if code == USAGE_EXIT:
            usage(exe, args)
            return 1
        return code
    return 0
