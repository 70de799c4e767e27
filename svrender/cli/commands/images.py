"""Image rendering commands for the svrender CLI."""

from typing import Optional

import typer

from svrender.cli.utils import emit, fail, load_datasource, parse_size
from svrender.exceptions import InvalidSettingError
from svrender.rendering.exporter import render_image_gallery, render_preview_page
from svrender.rendering.image_renderer import ImageRenderer
from svrender.rendering.site_datasource import InMemoryImageScaler


def images(
    site: str = typer.Argument(..., help="Site description (JSON)"),
    scale: Optional[str] = typer.Option(
        None, "--scale", help="Scale images to fit WIDTHxHEIGHT"
    ),
    describe: bool = typer.Option(
        True, "--describe/--no-describe", help="Use image descriptions as alt text"
    ),
    lazy: bool = typer.Option(False, "--lazy", help="Add loading=\"lazy\""),
    page: bool = typer.Option(False, "--page", help="Wrap the gallery in an html page"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file"),
):
    """Render every image of a site as a gallery."""
    ds = load_datasource(site)

    renderer = ImageRenderer(ds, ds)
    renderer.set_use_auto_description(describe)
    renderer.set_lazy_load(lazy)
    if scale:
        try:
            width, height = parse_size(scale)
            renderer.set_image_scaler(InMemoryImageScaler(ds, width, height))
        except (ValueError, InvalidSettingError) as e:
            fail(str(e))

    fragment = render_image_gallery(renderer, ds.targets("sv:image"))
    if page:
        fragment = render_preview_page(f"{ds.site_name}: images", [("Images", fragment)])
    emit(fragment, output)
