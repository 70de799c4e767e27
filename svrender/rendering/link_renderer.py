"""
Stateful renderer for html text links.

A LinkRenderer is created once and reused for many links (e.g. every entry
of a menu). Typical use:

    renderer = LinkRenderer(lookup, decoration)
    renderer.set_use_auto_title(True)
    for page in pages:
        if renderer.is_renderable_target(page):
            renderer.update(page, "normal", names[page])
            out.append(renderer.render())

Mandatory data is the target and the font class; the text falls back to the
target's display name for node targets. Rendering with mandatory data missing,
or with a target that cannot be resolved, yields "".

Boolean settings have ``force_*``/``clear_*`` helpers and nullable attributes
have ``clear_*`` helpers; these are plain wrappers around the setters.
"""

from __future__ import annotations

import logging
from typing import Optional

from .attributes import AttributeSet
from .encoding import append_parameters, encode_text
from .fallbacks import TextFallbackResolver
from .markup import StatefulRenderer, assemble
from .options import DEFAULT_DECORATION, LinkRendererDefaults
from .renderer_iface import (
    FileInfo,
    NodeTarget,
    SiteDecorationSettings,
    StringTarget,
    TargetLookup,
    TargetRef,
)
from .state import KEEP, LinkRenderState
from .targets import ResolvedTarget, TargetResolver

LOGGER = logging.getLogger(__name__)

LINK_ATTRIBUTE_ORDER = (
    "id",
    "href",
    "class",
    "style",
    "title",
    "rel",
    "accesskey",
    "lang",
    "hreflang",
    "target",
    "download",
    "onclick",
    "onkeypress",
)


def _put(attrs: AttributeSet, name: str, value: Optional[str]) -> None:
    if value is not None and value.strip():
        attrs.set(name, value)


def _opens_new_window(open_new_window: bool, rel: Optional[str]) -> bool:
    if open_new_window:
        return True
    return bool(rel) and "external" in rel.lower().split()  # type: ignore[union-attr]


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} bytes"
    if size < 1024 * 1024:
        return f"{round(size / 1024)} kB"
    return f"{size / (1024 * 1024):.1f} MB"


class LinkRenderer(StatefulRenderer):
    _op = "link.render"

    def __init__(
        self,
        lookup: Optional[TargetLookup] = None,
        decoration: Optional[SiteDecorationSettings] = None,
        defaults: Optional[LinkRendererDefaults] = None,
    ):
        super().__init__()
        self.defaults = defaults or LinkRendererDefaults()
        self.decoration = decoration or DEFAULT_DECORATION
        self._targets = TargetResolver(
            lookup, self.defaults.renderable_types, self.defaults.site_hosts
        )
        self._fallbacks = TextFallbackResolver(
            self._targets, max_auto_title_length=self.defaults.max_auto_title_length
        )
        self._state = LinkRenderState.from_defaults(self.defaults)

    @property
    def state(self) -> LinkRenderState:
        return self._state

    def _has_mandatory(self) -> bool:
        return self._state.has_mandatory()

    # ------------------------------------------------------------- mandatory

    def _accept_target(self, target: Optional[TargetRef]) -> bool:
        if target is None or not self._targets.is_renderable(target):
            LOGGER.debug(
                "link target ignored",
                extra={"component": "render", "op": "link.set_target", "target": str(target)},
            )
            return False
        self._targets.invalidate(keep=target)
        return True

    def update(
        self,
        target: TargetRef,
        font_class=KEEP,
        text: Optional[str] = None,
        title: Optional[str] = None,
    ) -> None:
        """Replace target, text and title (font class only when given).

        A target that is not renderable is ignored and the previous target kept.
        """
        new_target = target if self._accept_target(target) else self._state.target
        self._state.update(new_target, font_class, text, title)
        self._touch()

    def update_clean(
        self,
        target: TargetRef,
        font_class=KEEP,
        text: Optional[str] = None,
        title: Optional[str] = None,
    ) -> None:
        """Like update, but also removes all optional attributes."""
        new_target = target if self._accept_target(target) else self._state.target
        self._state.update_clean(new_target, font_class, text, title)
        self._touch()

    def clear_all_optional(self) -> None:
        self._state.clear_optional()
        self._touch()

    def set_target(self, target: TargetRef) -> None:
        if self._accept_target(target):
            self._state.target = target
            self._touch()

    def set_string_target(self, value: str) -> None:
        self.set_target(StringTarget(value))

    def is_renderable_target(self, target: TargetRef) -> bool:
        return self._targets.is_renderable(target)

    def is_valid_target(self, target: TargetRef) -> bool:
        return self._targets.is_valid(target)

    def set_font_class(self, font_class: Optional[str]) -> None:
        self._state.font_class = font_class
        self._touch()

    def set_font(self, font_node: Optional[NodeTarget]) -> None:
        """Set the font class from a font node; ignored if none can be extracted."""
        lookup = self._targets.lookup
        resolve = getattr(lookup, "resolve_font_class", None)
        if font_node is None or resolve is None:
            return
        font_class = resolve(font_node)
        if font_class:
            self.set_font_class(font_class)

    def set_text(self, text: Optional[str]) -> None:
        self._state.text = text
        self._touch()

    def set_title(self, title: Optional[str]) -> None:
        self._state.title = title
        self._touch()

    def remove_title(self) -> None:
        self.set_title(None)

    # -------------------------------------------------------------- optional

    def _set_optional(self, name: str, value) -> None:
        setattr(self._state.optional, name, value)
        self._touch()

    def set_style(self, style: Optional[str]) -> None:
        self._set_optional("style", style)

    def clear_style(self) -> None:
        self.set_style(None)

    def set_lang(self, lang: Optional[str]) -> None:
        self._set_optional("lang", lang)

    def clear_lang(self) -> None:
        self.set_lang(None)

    def set_href_lang(self, href_lang: Optional[str]) -> None:
        self._set_optional("href_lang", href_lang)

    def clear_href_lang(self) -> None:
        self.set_href_lang(None)

    def add_target_parameter(self, key: Optional[str], value: Optional[str]) -> None:
        if key is None or not key.strip():
            return
        self._state.optional.target_parameters[key] = value
        self._touch()

    def clear_target_parameters(self) -> None:
        self._state.optional.target_parameters.clear()
        self._touch()

    def add_data_attribute(self, name: Optional[str], value: Optional[str]) -> None:
        self._state.optional.data_attributes.set(name, value)
        self._touch()

    def clear_data_attributes(self) -> None:
        self._state.optional.data_attributes.clear()
        self._touch()

    def add_aria_attribute(self, name: Optional[str], value: Optional[str]) -> None:
        self._state.optional.aria_attributes.set(name, value)
        self._touch()

    def clear_aria_attributes(self) -> None:
        self._state.optional.aria_attributes.clear()
        self._touch()

    def set_access_key(self, access_key: Optional[str]) -> None:
        self._set_optional("access_key", access_key)

    def clear_access_key(self) -> None:
        self.set_access_key(None)

    def set_rel(self, rel: Optional[str]) -> None:
        """Note: a rel containing "external" opens the link in a new window."""
        self._set_optional("rel", rel)

    def clear_rel(self) -> None:
        self.set_rel(None)

    def set_onclick(self, onclick: Optional[str]) -> None:
        """Rendered as both onclick and onkeypress."""
        self._set_optional("onclick", onclick)

    def clear_onclick(self) -> None:
        self.set_onclick(None)

    def set_id(self, id: Optional[str]) -> None:
        """No checks are made; a valid id must be unique within the document."""
        self._set_optional("id", id)

    def clear_id(self) -> None:
        self.set_id(None)

    def set_open_new_window(self, open_new_window: bool) -> None:
        self._set_optional("open_new_window", bool(open_new_window))

    def force_open_new_window(self) -> None:
        self.set_open_new_window(True)

    def clear_open_new_window(self) -> None:
        self.set_open_new_window(False)

    def set_use_download(self, use_download: bool) -> None:
        self._set_optional("use_download", bool(use_download))

    def force_use_download(self) -> None:
        self.set_use_download(True)

    def clear_use_download(self) -> None:
        self.set_use_download(False)

    # -------------------------------------------------------------- settings

    def _set_setting(self, name: str, value: bool) -> None:
        setattr(self._state.settings, name, bool(value))
        self._touch()

    def set_use_parameter_encoding(self, enabled: bool) -> None:
        self._set_setting("use_parameter_encoding", enabled)

    def force_use_parameter_encoding(self) -> None:
        self.set_use_parameter_encoding(True)

    def clear_use_parameter_encoding(self) -> None:
        self.set_use_parameter_encoding(False)

    def set_use_link_decoration_settings(self, enabled: bool) -> None:
        self._set_setting("use_link_decoration_settings", enabled)

    def force_use_link_decoration_settings(self) -> None:
        self.set_use_link_decoration_settings(True)

    def clear_use_link_decoration_settings(self) -> None:
        self.set_use_link_decoration_settings(False)

    def set_use_resource_decoration_settings(self, enabled: bool) -> None:
        self._set_setting("use_resource_decoration_settings", enabled)

    def force_use_resource_decoration_settings(self) -> None:
        self.set_use_resource_decoration_settings(True)

    def clear_use_resource_decoration_settings(self) -> None:
        self.set_use_resource_decoration_settings(False)

    def set_use_encoding(self, enabled: bool) -> None:
        self._set_setting("use_encoding", enabled)

    def force_use_encoding(self) -> None:
        self.set_use_encoding(True)

    def clear_use_encoding(self) -> None:
        self.set_use_encoding(False)

    def set_use_auto_title(self, enabled: bool) -> None:
        self._set_setting("use_auto_title", enabled)

    def force_use_auto_title(self) -> None:
        self.set_use_auto_title(True)

    def clear_use_auto_title(self) -> None:
        self.set_use_auto_title(False)

    def set_use_cross_site_target_checking(self, enabled: bool) -> None:
        """Costly; enable only if the site links to pages on other sites."""
        self._set_setting("use_cross_site_target_checking", enabled)

    def force_use_cross_site_target_checking(self) -> None:
        self.set_use_cross_site_target_checking(True)

    def clear_use_cross_site_target_checking(self) -> None:
        self.set_use_cross_site_target_checking(False)

    # ------------------------------------------------------------- rendering

    def _render(self) -> Optional[str]:
        return self._compose()

    def render_around(self, inner_html: str) -> str:
        """Render the link around ready-made markup such as an <img>.

        Only the target is required here; without a font class the link is
        rendered without a class attribute.
        """
        if self._state.target is None or not inner_html:
            return ""
        return self._guarded(lambda: self._compose(inner_html=inner_html))

    def _compose(self, inner_html: Optional[str] = None) -> Optional[str]:
        """Build the <a> element; ``inner_html`` replaces the (encoded) link text."""
        st = self._state
        if st.target is None or not self._targets.is_renderable(st.target):
            return None
        s = st.settings
        opt = st.optional
        resolved = self._targets.resolve(
            st.target, cross_site=s.use_cross_site_target_checking  # type: ignore[arg-type]
        )
        if resolved is None:
            return None

        text: Optional[str] = None
        if inner_html is None:
            text = self._fallbacks.resolve_text(st)
            if not text:
                return None
            inner = encode_text(text, s.use_encoding)
        else:
            inner = inner_html
        title = self._fallbacks.resolve_title(st, text)

        new_window = _opens_new_window(opt.open_new_window, opt.rel)
        rel = opt.rel
        if new_window and not rel:
            rel = self.defaults.new_window_rel

        attrs = AttributeSet()
        _put(attrs, "id", opt.id)
        attrs.set(
            "href", append_parameters(resolved.url, opt.target_parameters, s.use_parameter_encoding)
        )
        _put(attrs, "class", st.font_class)
        _put(attrs, "style", opt.style)
        _put(attrs, "title", title)
        _put(attrs, "rel", rel)
        _put(attrs, "accesskey", opt.access_key)
        _put(attrs, "lang", opt.lang)
        _put(attrs, "hreflang", opt.href_lang)
        if new_window:
            _put(attrs, "target", self.defaults.new_window_target)
        if opt.use_download:
            attrs.set("download", None)
        if opt.onclick is not None and opt.onclick.strip():
            attrs.set("onclick", opt.onclick)
            attrs.set("onkeypress", opt.onclick)
        attrs.update(opt.data_attributes)
        attrs.update(opt.aria_attributes)

        inner += self._decorations(resolved, new_window)
        return assemble(
            "a", attrs, LINK_ATTRIBUTE_ORDER, inner=inner, encode=s.use_encoding
        )

    def _decorations(self, resolved: ResolvedTarget, new_window: bool) -> str:
        s = self._state.settings
        deco = self.decoration
        out = ""
        if s.use_link_decoration_settings:
            external = resolved.external and deco.show_external_link_icon
            window = new_window and deco.show_new_window_icon
            kind = None
            if external and window:
                kind = "external-new-window"
            elif external:
                kind = "external"
            elif window:
                kind = "new-window"
            if kind:
                out += f'<span class="sv-linkicon sv-linkicon-{kind}" aria-hidden="true"></span>'
        if s.use_resource_decoration_settings and resolved.file_info is not None:
            out += self._file_decoration(resolved.file_info)
        return out

    def _file_decoration(self, info: FileInfo) -> str:
        deco = self.decoration
        enc = self._state.settings.use_encoding
        ext = info.extension.lstrip(".").lower()
        if not ext:
            return ""
        out = ""
        if deco.show_file_type_icon:
            out += (
                f'<span class="sv-fileicon sv-fileicon-{encode_text(ext, enc)}"'
                ' aria-hidden="true"></span>'
            )
        if deco.show_file_type_description:
            label = info.description or ext.upper()
            if info.size is not None:
                label = f"{label}, {format_file_size(info.size)}"
            out += f' <span class="sv-filedescription">({encode_text(label, enc)})</span>'
        return out
