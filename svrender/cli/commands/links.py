"""Link rendering commands for the svrender CLI."""

from typing import List, Optional

import typer

from svrender.cli.utils import emit, fail, load_datasource
from svrender.rendering.exporter import render_link_list, render_preview_page
from svrender.rendering.link_renderer import LinkRenderer
from svrender.rendering.options import LINK_TARGET_TYPES, LinkRendererDefaults


def links(
    site: str = typer.Argument(..., help="Site description (JSON)"),
    node: Optional[List[str]] = typer.Option(
        None, "--node", "-n", help="Node id to link to (repeatable); default: all"
    ),
    font: str = typer.Option("normal", "--font", help="Font class of the links"),
    auto_title: bool = typer.Option(
        False, "--auto-title", help="Use display names as link titles"
    ),
    new_window: bool = typer.Option(False, "--new-window", help="Open links in a new window"),
    page: bool = typer.Option(False, "--page", help="Wrap the list in an html page"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file"),
):
    """Render links to the nodes of a site as an html list."""
    ds = load_datasource(site)

    if node:
        targets = []
        for identifier in node:
            target = ds.target(identifier)
            if target is None:
                fail(f"Unknown node: {identifier}")
            targets.append(target)
    else:
        targets = [t for t in ds.targets() if t.node_type in LINK_TARGET_TYPES]

    renderer = LinkRenderer(
        ds, ds.decoration, LinkRendererDefaults(site_hosts=ds.site_hosts)
    )
    renderer.set_font_class(font)
    renderer.set_use_auto_title(auto_title)
    renderer.set_open_new_window(new_window)

    fragment = render_link_list(renderer, targets)
    if page:
        fragment = render_preview_page(f"{ds.site_name}: links", [("Links", fragment)])
    emit(fragment, output)
