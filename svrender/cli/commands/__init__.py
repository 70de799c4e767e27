"""Command modules for the svrender CLI."""

from svrender.cli.commands import check, images, links

__all__ = ["check", "images", "links"]
