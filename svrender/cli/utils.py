"""Shared helpers for the svrender CLI commands."""

import logging
import os
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from svrender.exceptions import SiteModelError
from svrender.models import load_site
from svrender.rendering.exporter import write_html
from svrender.rendering.site_datasource import InMemorySiteDataSource

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Install a rich log handler on stderr; --verbose enables library debug logs."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                rich_tracebacks=True,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
    )
    if verbose:
        logging.getLogger("svrender").setLevel(logging.DEBUG)


def fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def load_datasource(path: str) -> InMemorySiteDataSource:
    try:
        doc = load_site(path)
    except SiteModelError as e:
        fail(str(e))
    return InMemorySiteDataSource.from_document(doc)


def parse_size(value: str) -> Tuple[int, int]:
    """Parse "WIDTHxHEIGHT" (e.g. "400x300")."""
    width, sep, height = value.lower().partition("x")
    if not sep:
        raise ValueError(f"expected WIDTHxHEIGHT, got {value!r}")
    return int(width), int(height)


def emit(markup: str, output: Optional[str] = None) -> None:
    """Write markup to a file, or print it unwrapped to stdout."""
    if output:
        out_dir, filename = os.path.split(os.path.abspath(output))
        write_html("", markup, out_dir, filename=filename)
        console.print(f"Wrote [bold]{escape(output)}[/bold]")
        return
    typer.echo(markup)
