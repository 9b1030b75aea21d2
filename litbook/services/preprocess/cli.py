import sys
import typer
from rich.console import Console
from litbook.core import logging as log
from litbook.core.errors import LitbookError
from . import protocol

def preprocess():
    """Read the book from stdin, render Rust chapters, write it to stdout."""
    _ = log.setup()
    try:
        protocol.run(sys.stdin, sys.stdout)
    except LitbookError as e:
        Console(stderr=True).print(str(e), markup=False, highlight=False)
        raise typer.Exit(code=1)

def supports(
    renderer: str = typer.Argument(..., help="Output format mdBook is building"),
):
    """Every renderer is supported."""
    raise typer.Exit(code=0)
