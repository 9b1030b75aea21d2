from pathlib import Path
from typing import Optional
import typer
from rich import print
from rich.console import Console
from litbook.core import logging as log
from litbook.core.errors import FileAccessError, LitbookError
from .module import transform_module
from .renderer import RenderOptions

app = typer.Typer(help="Render the `body` function of a Rust file as Markdown")

@app.command("run")
def run(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Rust source file"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write Markdown here instead of stdout"),
    language: str = typer.Option("rust", "--language", help="Info string of the code fences"),
    ignore: bool = typer.Option(False, "--ignore/--no-ignore", help="Mark code fences as not tested"),
):
    logger = log.setup()
    options = RenderOptions(language=language, ignore=ignore)
    try:
        markdown = transform_module(source.read_text(encoding="utf-8"), options)
        if markdown is None:
            print(f"[yellow]No `fn body` found in {source}[/yellow]")
            return
        if out is None:
            typer.echo(markdown, nl=False)
            return
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(markdown, encoding="utf-8")
        except OSError as e:
            raise FileAccessError(f"cannot write {out}: {e}") from e
    except LitbookError as e:
        Console(stderr=True).print(str(e), markup=False, highlight=False)
        raise typer.Exit(code=1)
    logger.debug("rendered %s", source)
    print(f"📄 Markdown written to {out}")
