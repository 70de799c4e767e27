"""
Mutable render state for link and image renderers.

A state object is owned by exactly one renderer and survives across render
calls. Settings are seeded from an immutable defaults object and are only
changed explicitly; ``update`` replaces mandatory fields, ``update_clean``
additionally resets every optional attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, Optional

from .attributes import ARIA_PREFIX, DATA_PREFIX, AttributeSet
from .options import (
    DimensionMode,
    ImageRendererDefaults,
    LinkRendererDefaults,
    SourceSetMode,
)
from .renderer_iface import ImageScaler, NodeTarget, TargetRef


class _Keep:
    def __repr__(self) -> str:
        return "KEEP"


# Marker for "leave this field as it is" in update calls
KEEP = _Keep()


@dataclass
class LinkSettings:
    use_auto_title: bool
    use_encoding: bool
    use_parameter_encoding: bool
    use_link_decoration_settings: bool
    use_resource_decoration_settings: bool
    use_cross_site_target_checking: bool

    @classmethod
    def from_defaults(cls, defaults: LinkRendererDefaults) -> "LinkSettings":
        return cls(**{f.name: getattr(defaults, f.name) for f in fields(cls)})


@dataclass
class LinkOptionalAttributes:
    style: Optional[str] = None
    onclick: Optional[str] = None
    id: Optional[str] = None
    rel: Optional[str] = None
    access_key: Optional[str] = None
    lang: Optional[str] = None
    href_lang: Optional[str] = None
    target_parameters: Dict[str, Optional[str]] = field(default_factory=dict)
    data_attributes: AttributeSet = field(
        default_factory=lambda: AttributeSet(DATA_PREFIX)
    )
    aria_attributes: AttributeSet = field(
        default_factory=lambda: AttributeSet(ARIA_PREFIX)
    )
    open_new_window: bool = False
    use_download: bool = False


@dataclass
class LinkRenderState:
    settings: LinkSettings
    target: Optional[TargetRef] = None
    font_class: Optional[str] = None
    text: Optional[str] = None
    title: Optional[str] = None
    optional: LinkOptionalAttributes = field(default_factory=LinkOptionalAttributes)

    @classmethod
    def from_defaults(cls, defaults: LinkRendererDefaults) -> "LinkRenderState":
        return cls(settings=LinkSettings.from_defaults(defaults))

    def has_mandatory(self) -> bool:
        """Target and font class are always required; text may be derived later."""
        return self.target is not None and self.font_class is not None

    def update(
        self,
        target: TargetRef,
        font_class=KEEP,
        text: Optional[str] = None,
        title: Optional[str] = None,
    ) -> None:
        self.target = target
        if font_class is not KEEP:
            self.font_class = font_class
        self.text = text
        self.title = title

    def update_clean(
        self,
        target: TargetRef,
        font_class=KEEP,
        text: Optional[str] = None,
        title: Optional[str] = None,
    ) -> None:
        self.update(target, font_class, text, title)
        self.clear_optional()

    def clear_optional(self) -> None:
        self.optional = LinkOptionalAttributes()


@dataclass
class ImageSettings:
    use_auto_description: bool
    use_title_rendering: bool
    use_auto_title: bool
    use_encoding: bool
    use_image_scaler: bool
    lazy_load: bool
    source_set_mode: SourceSetMode
    dimension_mode: DimensionMode

    @classmethod
    def from_defaults(cls, defaults: ImageRendererDefaults) -> "ImageSettings":
        return cls(**{f.name: getattr(defaults, f.name) for f in fields(cls)})


@dataclass
class ImageRenderState:
    settings: ImageSettings
    image: Optional[NodeTarget] = None
    hover_image: Optional[NodeTarget] = None
    style: Optional[str] = None
    description: Optional[str] = None
    image_scaler: Optional[ImageScaler] = None

    @classmethod
    def from_defaults(cls, defaults: ImageRendererDefaults) -> "ImageRenderState":
        return cls(settings=ImageSettings.from_defaults(defaults), style=defaults.style)

    def has_mandatory(self) -> bool:
        return self.image is not None
