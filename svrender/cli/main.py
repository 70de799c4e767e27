#!/usr/bin/env python
"""Command line interface for svrender."""

import typer

from svrender.cli.commands import check, images, links
from svrender.cli.utils import setup_logging

app = typer.Typer(help="Render links and images of a site description to html")

app.command("links")(links.links)
app.command("images")(images.images)
app.command("check")(check.check)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Preview link and image markup for a JSON site description."""
    setup_logging(verbose)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
