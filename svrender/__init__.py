"""Reusable, stateful html renderers for links and images."""

from svrender.exceptions import InvalidSettingError, SiteModelError, SvRenderError
from svrender.rendering.image_link_renderer import ImageLinkRenderer
from svrender.rendering.image_renderer import ImageRenderer
from svrender.rendering.link_renderer import LinkRenderer
from svrender.rendering.markup import RenderPhase
from svrender.rendering.options import (
    DimensionMode,
    ImageRendererDefaults,
    LinkRendererDefaults,
    SourceSetMode,
)
from svrender.rendering.renderer_iface import (
    NodeTarget,
    SiteDecorationSettings,
    StringTarget,
    TargetClassification,
)

__all__ = [
    "DimensionMode",
    "ImageLinkRenderer",
    "ImageRenderer",
    "ImageRendererDefaults",
    "InvalidSettingError",
    "LinkRenderer",
    "LinkRendererDefaults",
    "NodeTarget",
    "RenderPhase",
    "SiteDecorationSettings",
    "SiteModelError",
    "SourceSetMode",
    "StringTarget",
    "SvRenderError",
    "TargetClassification",
]
