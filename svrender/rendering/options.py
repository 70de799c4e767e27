"""
Renderer defaults for link and image markup.

Centralizes the initial values of every renderer setting so callers can tune
defaults without touching core logic. A defaults object is immutable and is
handed to a renderer at construction; the renderer copies the values into its
own mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Type, TypeVar, Union

from ..exceptions import InvalidSettingError
from .renderer_iface import SiteDecorationSettings


class SourceSetMode(Enum):
    """srcset attribute rendering strategy."""

    AUTO = "auto"
    ON = "on"
    OFF = "off"


class DimensionMode(Enum):
    """width/height css style rendering strategy."""

    AUTO = "auto"
    ON = "on"
    OFF = "off"


_M = TypeVar("_M", SourceSetMode, DimensionMode)


def coerce_mode(mode_cls: Type[_M], value: Union[_M, str]) -> _M:
    """Accept an enum member or its (case-insensitive) name/value."""
    if isinstance(value, mode_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in mode_cls:
            if key in (member.value, member.name.lower()):
                return member
    raise InvalidSettingError(
        mode_cls.__name__, value, "expected one of auto, on, off"
    )


# Node types a link may point to.
LINK_TARGET_TYPES: Tuple[str, ...] = (
    "sv:article",
    "sv:collaborationGroup",
    "sv:collaborationGroupPage",
    "sv:collaborationGroupTemplate",
    "sv:file",
    "sv:image",
    "sv:link",
    "sv:page",
    "sv:sitePage",
    "sv:structureLink",
    "sv:structurePage",
    "sv:systemUser",
    "sv:template",
    "sv:user",
    "sv:userIdentity",
)

# Node types whose own target must be valid for the node to be valid.
INDIRECTION_TYPES: Tuple[str, ...] = ("sv:link", "sv:structureLink")

IMAGE_TYPES: Tuple[str, ...] = ("sv:image",)


@dataclass(frozen=True)
class LinkRendererDefaults:
    # Rendering settings
    use_auto_title: bool = False
    use_encoding: bool = True
    use_parameter_encoding: bool = True
    use_link_decoration_settings: bool = True
    use_resource_decoration_settings: bool = True
    use_cross_site_target_checking: bool = False

    # Link behavior
    new_window_target: str = "_blank"
    new_window_rel: Optional[str] = "noopener noreferrer"
    # Hosts treated as internal when deciding whether a string target is external
    site_hosts: Tuple[str, ...] = ()

    # Derived (auto) titles longer than this are leniently truncated
    max_auto_title_length: Optional[int] = None

    renderable_types: Tuple[str, ...] = LINK_TARGET_TYPES

    def __post_init__(self) -> None:
        if self.max_auto_title_length is not None and self.max_auto_title_length <= 0:
            raise InvalidSettingError(
                "max_auto_title_length", self.max_auto_title_length, "must be positive"
            )


@dataclass(frozen=True)
class ImageRendererDefaults:
    use_auto_description: bool = False
    use_title_rendering: bool = False
    use_auto_title: bool = False
    use_encoding: bool = True
    use_image_scaler: bool = True
    lazy_load: bool = False
    source_set_mode: SourceSetMode = SourceSetMode.AUTO
    dimension_mode: DimensionMode = DimensionMode.AUTO

    # The element class is always rendered; default style is "border:none"
    image_class: str = "sv-noborder"
    style: Optional[str] = "border:none"

    renderable_types: Tuple[str, ...] = IMAGE_TYPES


DEFAULT_DECORATION = SiteDecorationSettings()
