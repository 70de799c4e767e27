#!/usr/bin/env python
"""
Render a navigation menu and a linked logo from a JSON site description.

Usage:
    python examples/menu.py tests/fixtures/site.json [--verbose]
"""

import argparse
import logging

from rich.logging import RichHandler

from svrender.models import load_site
from svrender.rendering.image_link_renderer import ImageLinkRenderer
from svrender.rendering.image_renderer import ImageRenderer
from svrender.rendering.link_renderer import LinkRenderer
from svrender.rendering.options import LinkRendererDefaults
from svrender.rendering.site_datasource import InMemorySiteDataSource

logger = logging.getLogger("svrender.example")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a menu from a site description")
    p.add_argument("site", help="Site description (JSON)")
    p.add_argument("--verbose", action="store_true", help="Show renderer debug logs")
    return p.parse_args()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(
                rich_tracebacks=True,
                markup=True,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
    )
    args = parse_args()
    if args.verbose:
        logging.getLogger("svrender").setLevel(logging.DEBUG)

    ds = InMemorySiteDataSource.from_document(load_site(args.site))

    # One renderer, reused for every menu entry
    links = LinkRenderer(ds, ds.decoration, LinkRendererDefaults(site_hosts=ds.site_hosts))
    links.set_use_auto_title(True)
    links.set_font_class("menu-item")
    for page in ds.targets("sv:page"):
        if not links.is_renderable_target(page):
            continue
        if not links.is_valid_target(page):
            logger.info("skipping [bold]%s[/bold]: not valid", page.identifier)
            continue
        links.update(page)
        print(links.render())

    logo = ds.target("logo")
    home = ds.target("start")
    if logo is not None and home is not None:
        linked = ImageLinkRenderer(LinkRenderer(ds), ImageRenderer(ds, ds))
        linked.link_renderer.update(home, "logo")
        linked.image_renderer.set_image(logo)
        print(linked.render())


if __name__ == "__main__":
    main()
