"""
Stateful renderer for img elements.

Loading a new image replaces the previous one; the description, style, hover
image, scaler and settings survive until changed. An image that is not a
proper image node is ignored and the previously loaded image is kept.

When an image scaler is loaded and ``use_image_scaler`` is on, the scaled
variant is rendered. Images the scaler cannot handle (it returns None, e.g.
for SVG) render as "".
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .attributes import AttributeSet
from .encoding import encode_text
from .fallbacks import TextFallbackResolver
from .markup import StatefulRenderer, assemble
from .options import (
    DimensionMode,
    ImageRendererDefaults,
    SourceSetMode,
    coerce_mode,
)
from .renderer_iface import ImageScaler, MetadataLookup, NodeTarget, TargetLookup
from .state import ImageRenderState
from .targets import TargetResolver

LOGGER = logging.getLogger(__name__)

IMAGE_ATTRIBUTE_ORDER = (
    "src",
    "srcset",
    "alt",
    "title",
    "class",
    "style",
    "loading",
    "onmouseover",
    "onmouseout",
)


def _js_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _join_style(style: Optional[str], extra: str) -> str:
    base = (style or "").strip().rstrip(";")
    if not base:
        return extra
    if not extra:
        return base
    return f"{base};{extra}"


class ImageRenderer(StatefulRenderer):
    _op = "image.render"

    def __init__(
        self,
        lookup: Optional[TargetLookup] = None,
        metadata: Optional[MetadataLookup] = None,
        defaults: Optional[ImageRendererDefaults] = None,
    ):
        super().__init__()
        self.defaults = defaults or ImageRendererDefaults()
        self._metadata = metadata
        self._targets = TargetResolver(lookup, self.defaults.renderable_types)
        # Separate cache so hover checks never evict the main image entry
        self._hover_targets = TargetResolver(lookup, self.defaults.renderable_types)
        self._fallbacks = TextFallbackResolver(self._targets, metadata)
        self._state = ImageRenderState.from_defaults(self.defaults)

    @property
    def state(self) -> ImageRenderState:
        return self._state

    def _has_mandatory(self) -> bool:
        return self._state.has_mandatory()

    # ------------------------------------------------------------------ scaler

    def set_image_scaler(self, scaler: Optional[ImageScaler]) -> None:
        self._state.image_scaler = scaler
        self._touch()

    def clear_image_scaler(self) -> None:
        self.set_image_scaler(None)

    def is_image_scaler_loaded(self) -> bool:
        return self._state.image_scaler is not None

    def set_use_image_scaler(self, enabled: bool) -> None:
        self._set_setting("use_image_scaler", enabled)

    def force_use_image_scaler(self) -> None:
        self.set_use_image_scaler(True)

    def clear_use_image_scaler(self) -> None:
        self.set_use_image_scaler(False)

    # ------------------------------------------------------------------ images

    def _accept(self, resolver: TargetResolver, image: NodeTarget) -> bool:
        if not resolver.is_renderable(image):
            LOGGER.debug(
                "image ignored",
                extra={"component": "render", "op": "image.set_image", "target": str(image)},
            )
            return False
        resolver.invalidate(keep=image)
        return True

    def set_hover_image(self, image: Optional[NodeTarget]) -> None:
        if image is None:
            self._state.hover_image = None
        elif self._accept(self._hover_targets, image):
            self._state.hover_image = image
        self._touch()

    def clear_hover_image(self) -> None:
        self.set_hover_image(None)

    def is_hover_image_loaded(self) -> bool:
        return self._state.hover_image is not None

    def set_image(self, image: Optional[NodeTarget]) -> None:
        if image is None:
            self._state.image = None
            self._targets.invalidate()
        elif self._accept(self._targets, image):
            self._state.image = image
        self._touch()

    def update(self, image: Optional[NodeTarget], description: Optional[str] = None) -> None:
        """Load a new image and replace the description (None removes it)."""
        self.set_image(image)
        self._state.description = description

    def is_image_loaded(self) -> bool:
        return self._state.image is not None

    def is_renderable_image(self, image: NodeTarget) -> bool:
        return self._targets.is_renderable(image)

    # ---------------------------------------------------------------- settings

    def _set_setting(self, name: str, value) -> None:
        setattr(self._state.settings, name, value)
        self._touch()

    def set_use_auto_description(self, enabled: bool) -> None:
        self._set_setting("use_auto_description", bool(enabled))

    def force_use_auto_description(self) -> None:
        self.set_use_auto_description(True)

    def clear_use_auto_description(self) -> None:
        self.set_use_auto_description(False)

    def set_source_set_mode(self, mode: Union[SourceSetMode, str]) -> None:
        self._set_setting("source_set_mode", coerce_mode(SourceSetMode, mode))

    def force_source_set_mode(self) -> None:
        self.set_source_set_mode(SourceSetMode.ON)

    def clear_source_set_mode(self) -> None:
        self.set_source_set_mode(SourceSetMode.OFF)

    def reset_source_set_mode(self) -> None:
        self.set_source_set_mode(SourceSetMode.AUTO)

    def set_dimension_mode(self, mode: Union[DimensionMode, str]) -> None:
        self._set_setting("dimension_mode", coerce_mode(DimensionMode, mode))

    def force_dimension_mode(self) -> None:
        self.set_dimension_mode(DimensionMode.ON)

    def clear_dimension_mode(self) -> None:
        self.set_dimension_mode(DimensionMode.OFF)

    def reset_dimension_mode(self) -> None:
        self.set_dimension_mode(DimensionMode.AUTO)

    def set_use_title_rendering(self, enabled: bool) -> None:
        self._set_setting("use_title_rendering", bool(enabled))

    def force_use_title_rendering(self) -> None:
        self.set_use_title_rendering(True)

    def clear_use_title_rendering(self) -> None:
        self.set_use_title_rendering(False)

    def set_use_auto_title(self, enabled: bool) -> None:
        """Use metadata as title value when no description is available."""
        self._set_setting("use_auto_title", bool(enabled))

    def force_use_auto_title(self) -> None:
        self.set_use_auto_title(True)

    def clear_use_auto_title(self) -> None:
        self.set_use_auto_title(False)

    def set_use_encoding(self, enabled: bool) -> None:
        self._set_setting("use_encoding", bool(enabled))

    def force_use_encoding(self) -> None:
        self.set_use_encoding(True)

    def clear_use_encoding(self) -> None:
        self.set_use_encoding(False)

    def set_lazy_load(self, enabled: bool) -> None:
        self._set_setting("lazy_load", bool(enabled))

    def force_use_lazy_load(self) -> None:
        self.set_lazy_load(True)

    def clear_use_lazy_load(self) -> None:
        self.set_lazy_load(False)

    # -------------------------------------------------------------- attributes

    def set_description(self, description: Optional[str]) -> None:
        self._state.description = description
        self._touch()

    def clear_description(self) -> None:
        self.set_description(None)

    def set_style(self, style: Optional[str]) -> None:
        self._state.style = style
        self._touch()

    def clear_style(self) -> None:
        self.set_style(None)

    # --------------------------------------------------------------- rendering

    def _scaled(self, image: NodeTarget) -> Optional[NodeTarget]:
        scaler = self._state.image_scaler
        return scaler.scale(image, scaler.max_width, scaler.max_height)  # type: ignore[union-attr]

    def _render(self) -> Optional[str]:
        st = self._state
        s = st.settings
        image = st.image
        lookup = self._targets.lookup
        if lookup is None or image is None or not self._targets.is_renderable(image):
            return None

        use_scaler = s.use_image_scaler and st.image_scaler is not None
        source = image
        if use_scaler:
            scaled = self._scaled(image)
            if scaled is None:
                LOGGER.debug(
                    "image could not be scaled",
                    extra={"component": "render", "op": "image.scale", "target": str(image)},
                )
                return None
            source = scaled

        url = lookup.resolve_url(source)
        if not url or not url.strip():
            return None

        def attr(value: str) -> str:
            return encode_text(value, True)

        def text(value: str) -> str:
            return encode_text(value, s.use_encoding)

        attrs = AttributeSet()
        attrs.set("src", attr(url))
        srcset = self._source_set(image, use_scaler)
        if srcset:
            attrs.set("srcset", attr(srcset))
        attrs.set("alt", text(self._fallbacks.resolve_alt_or_description(st)))
        title = self._fallbacks.resolve_image_title(st)
        if title is not None:
            attrs.set("title", text(title))
        attrs.set("class", attr(self.defaults.image_class))
        style = _join_style(st.style, self._dimensions(source, use_scaler))
        if style:
            attrs.set("style", attr(style))
        if s.lazy_load:
            attrs.set("loading", "lazy")
        hover_url = self._hover_url(lookup, use_scaler)
        if hover_url:
            attrs.set("onmouseover", attr(f"this.src='{_js_string(hover_url)}'"))
            attrs.set("onmouseout", attr(f"this.src='{_js_string(url)}'"))
        return assemble("img", attrs, IMAGE_ATTRIBUTE_ORDER, encode=False)

    def _source_set(self, image: NodeTarget, scaled: bool) -> str:
        mode = self._state.settings.source_set_mode
        if mode is SourceSetMode.OFF or (mode is SourceSetMode.AUTO and scaled):
            return ""
        get_source_set = getattr(self._metadata, "get_source_set", None)
        if get_source_set is None:
            return ""
        candidates = get_source_set(image) or ()
        return ", ".join(f"{c.url} {int(c.width)}w" for c in candidates if c.url)

    def _dimensions(self, source: NodeTarget, scaled: bool) -> str:
        mode = self._state.settings.dimension_mode
        if mode is DimensionMode.OFF or (mode is DimensionMode.AUTO and not scaled):
            return ""
        get_dimensions = getattr(self._metadata, "get_dimensions", None)
        if get_dimensions is None:
            return ""
        dims = get_dimensions(source)
        if not dims:
            return ""
        width, height = dims
        return f"width:{int(width)}px;height:{int(height)}px"

    def _hover_url(self, lookup: TargetLookup, scaled: bool) -> Optional[str]:
        hover = self._state.hover_image
        if hover is None or not self._hover_targets.is_renderable(hover):
            return None
        if scaled:
            hover = self._scaled(hover)
            if hover is None:
                return None
        url = lookup.resolve_url(hover)
        return url if url and url.strip() else None
