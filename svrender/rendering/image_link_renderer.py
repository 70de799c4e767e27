"""
Linked images: an ImageRenderer wrapped in the link of a LinkRenderer.

All state lives in the two owned renderers; configure them through
``link_renderer`` and ``image_renderer``. The image renderer starts with
``use_auto_description`` on so the linked image has a textual alternative.

A thumbnail loop only needs targets:

    renderer.image_renderer.update(image)
    renderer.link_renderer.update(image)
    out.append(renderer.render())

The link font class is optional; without one no class attribute is rendered.
"""

from __future__ import annotations

from typing import Optional

from .image_renderer import ImageRenderer
from .link_renderer import LinkRenderer
from .markup import RenderPhase, StatefulRenderer


class ImageLinkRenderer(StatefulRenderer):
    _op = "image_link.render"

    def __init__(
        self,
        link_renderer: Optional[LinkRenderer] = None,
        image_renderer: Optional[ImageRenderer] = None,
    ):
        super().__init__()
        self.link_renderer = link_renderer or LinkRenderer()
        self.image_renderer = image_renderer or ImageRenderer()
        self.image_renderer.force_use_auto_description()

    def _has_mandatory(self) -> bool:
        return (
            self.link_renderer.state.target is not None
            and self.image_renderer.state.has_mandatory()
        )

    @property
    def phase(self) -> RenderPhase:
        # The owned renderers are mutated directly, so derive from their flags
        if not self._has_mandatory():
            return RenderPhase.EMPTY
        if self.link_renderer.is_rendered and self.image_renderer.is_rendered:
            return RenderPhase.RENDERED
        return RenderPhase.PARTIAL

    def _render(self) -> Optional[str]:
        img = self.image_renderer.render()
        if not img:
            return None
        return self.link_renderer.render_around(img)
