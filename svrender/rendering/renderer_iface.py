"""
Transport-agnostic collaborator seams for the renderers.

Defines the target reference union and the minimal lookups the renderers
require to resolve:
  - whether a node target is renderable/valid, and where it points (TargetLookup),
  - image metadata such as the description (MetadataLookup),
  - scaled variants of an image (ImageScaler).

Optional richer lookup capabilities (if present) may include:
  - resolve_link_target(target)      -> Optional[TargetRef]   (sv:link, sv:structureLink)
  - resolve_cross_site_url(target)   -> Optional[str]
  - is_external(target)              -> bool
  - resolve_file_info(target)        -> Optional[FileInfo]
  - resolve_font_class(font_node)    -> Optional[str]
  - get_dimensions(image)            -> Optional[Tuple[int, int]]
  - get_source_set(image)            -> Sequence[SourceSetCandidate]

The renderers never perform I/O themselves; they only call these interfaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Union


@dataclass(frozen=True)
class NodeTarget:
    """A structured reference to a content node."""

    identifier: str
    node_type: str

    def __str__(self) -> str:
        return f"{self.node_type}[{self.identifier}]"


@dataclass(frozen=True)
class StringTarget:
    """A literal href, e.g. "http://xyz.com", "?a=b", "/images/a.gif" or "#anchor"."""

    value: str

    def __str__(self) -> str:
        return self.value


TargetRef = Union[NodeTarget, StringTarget]


@dataclass(frozen=True)
class TargetClassification:
    renderable: bool
    valid: bool


@dataclass(frozen=True)
class FileInfo:
    """File-type facts used by resource decoration."""

    extension: str
    size: Optional[int] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SourceSetCandidate:
    url: str
    width: int


@dataclass(frozen=True)
class SiteDecorationSettings:
    """Site-level toggles for link and file-type decorations."""

    show_external_link_icon: bool = False
    show_new_window_icon: bool = False
    show_file_type_icon: bool = False
    show_file_type_description: bool = False


class TargetLookup(Protocol):
    """Minimal target datasource required by the link and image renderers."""

    def classify(self, target: NodeTarget) -> TargetClassification: ...

    def resolve_url(self, target: NodeTarget) -> Optional[str]: ...

    def resolve_display_name(self, target: NodeTarget) -> Optional[str]: ...


class MetadataLookup(Protocol):
    """Minimal image metadata source required by the image renderer."""

    def get_description(self, image: NodeTarget) -> Optional[str]: ...


class ImageScaler(Protocol):
    """Creates scaled variants of images. Implementations are immutable."""

    @property
    def max_width(self) -> int: ...

    @property
    def max_height(self) -> int: ...

    def scale(
        self, image: NodeTarget, width: int, height: int
    ) -> Optional[NodeTarget]: ...
