"""
In-memory datasource backed by a SiteDocument.

Implements the minimal lookups (classify/resolve_url/resolve_display_name,
get_description) plus the optional richer ones the renderers look up with getattr:
  - resolve_link_target, resolve_cross_site_url, resolve_file_info,
    resolve_font_class
  - get_dimensions, get_source_set

Also provides InMemoryImageScaler, which registers scaled variants of image
nodes back into the datasource so they can be resolved like any other node.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit

from ..exceptions import InvalidSettingError
from ..models.site import DecorationModel, SiteDocument, SiteNode
from .encoding import append_parameters
from .renderer_iface import (
    FileInfo,
    MetadataLookup,
    NodeTarget,
    SiteDecorationSettings,
    SourceSetCandidate,
    StringTarget,
    TargetClassification,
    TargetLookup,
    TargetRef,
)

LOGGER = logging.getLogger(__name__)

_USER_TYPES = ("sv:user", "sv:systemUser")
_LINK_TYPES = ("sv:link", "sv:structureLink")


def _present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def _decoration(model: DecorationModel) -> SiteDecorationSettings:
    # Named fields only; extra keys may be present under a lenient extra policy
    return SiteDecorationSettings(
        show_external_link_icon=model.show_external_link_icon,
        show_new_window_icon=model.show_new_window_icon,
        show_file_type_icon=model.show_file_type_icon,
        show_file_type_description=model.show_file_type_description,
    )


@dataclass
class InMemorySiteDataSource(TargetLookup, MetadataLookup):
    _nodes: Dict[str, SiteNode] = field(default_factory=dict)
    site_name: str = "site"
    site_hosts: Tuple[str, ...] = ()
    site_urls: Dict[str, str] = field(default_factory=dict)
    decoration: SiteDecorationSettings = field(default_factory=SiteDecorationSettings)

    @classmethod
    def from_document(cls, doc: SiteDocument) -> "InMemorySiteDataSource":
        ds = cls(
            site_name=doc.site.name,
            site_hosts=tuple(doc.site.hosts),
            site_urls=dict(doc.site.sites),
            decoration=_decoration(doc.site.decoration),
        )
        for node in doc.nodes:
            ds.add_node(node)
        LOGGER.debug(
            "site loaded",
            extra={"component": "datasource", "op": "load", "nodes": len(ds._nodes)},
        )
        return ds

    def add_node(self, node: SiteNode) -> None:
        self._nodes[node.id] = node

    def node(self, target: Optional[TargetRef]) -> Optional[SiteNode]:
        if not isinstance(target, NodeTarget):
            return None
        node = self._nodes.get(target.identifier)
        if node is None or node.type != target.node_type:
            return None
        return node

    def target(self, identifier: str) -> Optional[NodeTarget]:
        """Build a NodeTarget for a known node id."""
        node = self._nodes.get(identifier)
        if node is None:
            return None
        return NodeTarget(node.id, node.type)

    def targets(self, node_type: Optional[str] = None) -> List[NodeTarget]:
        return [
            NodeTarget(n.id, n.type)
            for n in self._nodes.values()
            if node_type is None or n.type == node_type
        ]

    # Minimal protocol
    def classify(self, target: NodeTarget) -> TargetClassification:
        node = self.node(target)
        if node is None:
            return TargetClassification(renderable=False, valid=False)
        if node.type in _USER_TYPES:
            renderable = _present(node.mail)
        elif node.type == "sv:userIdentity":
            renderable = _present(node.profile_url) or _present(node.mail)
        else:
            renderable = True
        return TargetClassification(
            renderable=renderable, valid=renderable and not node.trashed
        )

    def resolve_url(self, target: NodeTarget) -> Optional[str]:
        node = self.node(target)
        if node is None:
            return None
        if node.type in _USER_TYPES:
            return f"mailto:{node.mail}" if _present(node.mail) else None
        if node.type == "sv:userIdentity":
            if _present(node.profile_url):
                return node.profile_url
            return f"mailto:{node.mail}" if _present(node.mail) else None
        if node.type in _LINK_TYPES and node.link_target is not None:
            ref = self.resolve_link_target(target)
            if isinstance(ref, StringTarget):
                return ref.value
            if isinstance(ref, NodeTarget):
                # One level only; a link to a link resolves to that link's own url
                ref_node = self.node(ref)
                return ref_node.url if ref_node is not None else None
            return None
        return node.url

    def resolve_display_name(self, target: NodeTarget) -> Optional[str]:
        node = self.node(target)
        return node.display_name if node is not None else None

    def get_description(self, image: NodeTarget) -> Optional[str]:
        node = self.node(image)
        return node.description if node is not None else None

    # Optional richer protocol
    def resolve_link_target(self, target: NodeTarget) -> Optional[TargetRef]:
        node = self.node(target)
        if node is None or node.link_target is None:
            return None
        dest = node.link_target
        if _present(dest.node):
            return self.target(dest.node)  # type: ignore[arg-type]
        if _present(dest.url):
            return StringTarget(dest.url)  # type: ignore[arg-type]
        return None

    def resolve_cross_site_url(self, target: NodeTarget) -> Optional[str]:
        node = self.node(target)
        if node is None or not node.site or node.site == self.site_name:
            return None
        base = self.site_urls.get(node.site)
        url = self.resolve_url(target)
        if not base or not url:
            return None
        if urlsplit(url).scheme:
            return url
        return base.rstrip("/") + "/" + url.lstrip("/")

    def resolve_file_info(self, target: NodeTarget) -> Optional[FileInfo]:
        node = self.node(target)
        if node is None:
            return None
        ext = node.extension
        if not _present(ext) and node.url:
            ext = posixpath.splitext(urlsplit(node.url).path)[1]
        ext = (ext or "").lstrip(".")
        if not ext:
            return None
        return FileInfo(extension=ext, size=node.size, description=node.file_description)

    def resolve_font_class(self, font_node: NodeTarget) -> Optional[str]:
        node = self.node(font_node)
        return node.font_class if node is not None else None

    def get_dimensions(self, image: NodeTarget) -> Optional[Tuple[int, int]]:
        node = self.node(image)
        if node is None or node.width is None or node.height is None:
            return None
        return node.width, node.height

    def get_source_set(self, image: NodeTarget) -> List[SourceSetCandidate]:
        node = self.node(image)
        if node is None:
            return []
        return [SourceSetCandidate(url=e.url, width=e.width) for e in node.source_set]


class InMemoryImageScaler:
    """Scales images of an InMemorySiteDataSource to fit within a bounding box.

    Scaled variants are registered in the datasource under
    ``"<id>@<width>x<height>"`` with a url carrying ``w``/``h`` parameters.
    Images marked ``scalable: false`` (e.g. SVG) cannot be scaled.
    """

    def __init__(self, datasource: InMemorySiteDataSource, max_width: int, max_height: int):
        for name, value in (("max_width", max_width), ("max_height", max_height)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidSettingError(name, value, "must be a positive integer")
        self._datasource = datasource
        self._max_width = max_width
        self._max_height = max_height

    @property
    def max_width(self) -> int:
        return self._max_width

    @property
    def max_height(self) -> int:
        return self._max_height

    def scale(self, image: NodeTarget, width: int, height: int) -> Optional[NodeTarget]:
        node = self._datasource.node(image)
        if node is None or not node.scalable or not node.url:
            return None
        w, h = width, height
        if node.width and node.height:
            # Fit within the box keeping the aspect ratio; never enlarge
            ratio = min(width / node.width, height / node.height, 1.0)
            w = max(1, round(node.width * ratio))
            h = max(1, round(node.height * ratio))
        scaled_id = f"{node.id}@{w}x{h}"
        if self._datasource.target(scaled_id) is None:
            scaled = node.model_copy(
                update={
                    "id": scaled_id,
                    "url": append_parameters(node.url, {"w": str(w), "h": str(h)}, True),
                    "width": w,
                    "height": h,
                    "source_set": [],
                }
            )
            self._datasource.add_node(scaled)
        return NodeTarget(scaled_id, node.type)
