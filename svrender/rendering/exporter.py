"""
Batch helpers that drive one reusable renderer over many targets.

These mirror how a menu or gallery template uses the renderers: a single
instance is updated per entry and rendered, unrenderable entries are skipped,
and the fragments are wrapped in list markup.
"""

from __future__ import annotations

import html
import logging
import os
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from tinyhtml import h, raw

from .image_link_renderer import ImageLinkRenderer
from .image_renderer import ImageRenderer
from .link_renderer import LinkRenderer
from .renderer_iface import NodeTarget, TargetRef

LOGGER = logging.getLogger(__name__)


def render_links(
    renderer: LinkRenderer,
    targets: Iterable[TargetRef],
    texts: Optional[Sequence[Optional[str]]] = None,
) -> List[str]:
    """Render one link per renderable target; others are skipped."""
    out: List[str] = []
    texts = list(texts or [])
    for i, target in enumerate(targets):
        if not renderer.is_renderable_target(target):
            LOGGER.debug(
                "skipping target",
                extra={"component": "export", "op": "links", "target": str(target)},
            )
            continue
        text = texts[i] if i < len(texts) else None
        renderer.update(target, text=text)
        markup = renderer.render()
        if markup:
            out.append(markup)
    return out


def render_link_list(
    renderer: LinkRenderer,
    targets: Iterable[TargetRef],
    css_class: str = "sv-links",
) -> str:
    items = [h("li")(raw(m)) for m in render_links(renderer, targets)]
    if not items:
        return ""
    return h("ul", **{"class": css_class})(*items).render()


def render_images(
    renderer: ImageRenderer,
    images: Iterable[NodeTarget],
) -> List[str]:
    out: List[str] = []
    for image in images:
        if not renderer.is_renderable_image(image):
            LOGGER.debug(
                "skipping image",
                extra={"component": "export", "op": "images", "target": str(image)},
            )
            continue
        # Descriptions are per image; fall back to metadata when auto is on
        renderer.update(image)
        markup = renderer.render()
        if markup:
            out.append(markup)
    return out


def render_image_gallery(
    renderer: ImageRenderer,
    images: Iterable[NodeTarget],
    css_class: str = "sv-gallery",
) -> str:
    figures = [h("figure")(raw(m)) for m in render_images(renderer, images)]
    if not figures:
        return ""
    return h("div", **{"class": css_class})(*figures).render()


def render_image_links(
    renderer: ImageLinkRenderer,
    pairs: Iterable[Tuple[TargetRef, NodeTarget]],
) -> List[str]:
    """Render (link target, image) pairs as linked images."""
    out: List[str] = []
    link = renderer.link_renderer
    image = renderer.image_renderer
    for target, img in pairs:
        if not link.is_renderable_target(target) or not image.is_renderable_image(img):
            continue
        link.update(target)
        image.update(img)
        markup = renderer.render()
        if markup:
            out.append(markup)
    return out


def render_preview_page(title: str, sections: Sequence[Tuple[str, str]]) -> str:
    """Wrap rendered fragments in a standalone html page, one section per entry."""
    body = []
    for heading, fragment in sections:
        children = [h("h2")(heading)] if heading else []
        body.append(h("section")(*children, raw(fragment)))
    return (
        '<!doctype html><meta charset="utf-8">'
        '<meta name="color-scheme" content="light dark">'
        f"<title>{html.escape(title)}</title>"
        "<style>"
        "body{font-family:-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica,Arial,sans-serif;line-height:1.4}"
        ".sv-noborder{border:none}"
        ".sv-gallery{display:flex;flex-wrap:wrap;gap:.5rem}"
        ".sv-gallery figure{margin:0}"
        "img{max-width:100%;height:auto}"
        ".sv-filedescription{color:#666;font-size:.9em}"
        "</style>"
        + h("h1")(title).render()
        + "".join(s.render() for s in body)
    )


def _safe_name(s: Optional[str]) -> str:
    if not s:
        return "untitled"
    s = re.sub(r"\s+", " ", s).strip()
    s = re.sub(r"[^\w\- ]+", "-", s)
    return s[:60] or "untitled"


def write_html(
    title: str,
    html_fragment: str,
    out_dir: str,
    *,
    full_page: bool = False,
    filename: Optional[str] = None,
) -> str:
    os.makedirs(out_dir, exist_ok=True)
    page = render_preview_page(title, [("", html_fragment)]) if full_page else html_fragment
    fname = filename or f"{_safe_name(title)}.html"
    path = os.path.join(out_dir, fname)
    with open(path, "w", encoding="utf-8") as f:
        f.write(page)
    return path
