"""
Target classification and resolution with a single-entry validity cache.

Renderability is a cheap check (node type allow-list plus the lookup's own
verdict, e.g. "user has a mail address"). Validity is a superset check that
also requires a non-empty destination and, for link-type nodes, a valid
referenced target one level down. Both verdicts for the most recently checked
target are cached so that a check followed by an update/render of the same
target does not repeat lookup work.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

from .options import INDIRECTION_TYPES
from .renderer_iface import (
    FileInfo,
    NodeTarget,
    StringTarget,
    TargetClassification,
    TargetLookup,
    TargetRef,
)

LOGGER = logging.getLogger(__name__)

_NOT_RENDERABLE = TargetClassification(renderable=False, valid=False)


@dataclass(frozen=True)
class ResolvedTarget:
    url: str
    external: bool
    file_info: Optional[FileInfo] = None


def is_external_url(url: str, site_hosts: Iterable[str] = ()) -> bool:
    parts = urlsplit(url.strip())
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        return False
    host = (parts.hostname or "").lower()
    return host not in {h.lower() for h in site_hosts}


class TargetResolver:
    def __init__(
        self,
        lookup: Optional[TargetLookup],
        renderable_types: Iterable[str],
        site_hosts: Iterable[str] = (),
    ):
        self._lookup = lookup
        self._renderable_types = frozenset(renderable_types)
        self._site_hosts = tuple(site_hosts)
        # Single cache entry: the last checked target and its verdicts
        self._cache_key: Optional[TargetRef] = None
        self._cache_lookup: Optional[TargetClassification] = None
        self._cache_valid: Optional[bool] = None

    @property
    def lookup(self) -> Optional[TargetLookup]:
        return self._lookup

    @property
    def cached_target(self) -> Optional[TargetRef]:
        return self._cache_key

    def invalidate(self, keep: Optional[TargetRef] = None) -> None:
        """Drop the cache entry unless it was computed for ``keep``."""
        if keep is not None and keep == self._cache_key:
            return
        self._cache_key = None
        self._cache_lookup = None
        self._cache_valid = None

    # ------------------------------------------------------------------ checks

    def is_renderable(self, target: Optional[TargetRef]) -> bool:
        if target is None:
            return False
        if isinstance(target, StringTarget):
            return bool(target.value and target.value.strip())
        return self._entry(target).renderable

    def is_valid(self, target: Optional[TargetRef]) -> bool:
        if not self.is_renderable(target):
            return False
        if not isinstance(target, NodeTarget):
            return True
        if self._cache_valid is None:
            self._cache_valid = self._compute_valid(target, self._entry(target))
        return self._cache_valid

    def classify(self, target: Optional[TargetRef]) -> TargetClassification:
        renderable = self.is_renderable(target)
        if not renderable:
            return _NOT_RENDERABLE
        return TargetClassification(renderable=True, valid=self.is_valid(target))

    def _entry(self, target: NodeTarget) -> TargetClassification:
        if target == self._cache_key and self._cache_lookup is not None:
            return self._cache_lookup
        self.invalidate()
        cls = self._lookup_classification(target)
        self._cache_key = target
        self._cache_lookup = cls
        if not cls.renderable:
            self._cache_valid = False
        return cls

    def _lookup_classification(self, target: NodeTarget) -> TargetClassification:
        if self._lookup is None or target.node_type not in self._renderable_types:
            return _NOT_RENDERABLE
        try:
            cls = self._lookup.classify(target)
        except Exception:
            LOGGER.debug(
                "targets.classify failed",
                exc_info=True,
                extra={"component": "render", "op": "targets.classify"},
            )
            return _NOT_RENDERABLE
        if not cls.renderable:
            return _NOT_RENDERABLE
        return cls

    def _compute_valid(
        self, target: NodeTarget, cls: TargetClassification
    ) -> bool:
        if not cls.renderable or not cls.valid:
            return False
        try:
            url = self._lookup.resolve_url(target) if self._lookup else None
            if not url or not url.strip():
                return False
            if target.node_type in INDIRECTION_TYPES:
                return self._referenced_target_valid(target)
        except Exception:
            LOGGER.debug(
                "targets.validate failed",
                exc_info=True,
                extra={"component": "render", "op": "targets.validate"},
            )
            return False
        return True

    def _referenced_target_valid(self, target: NodeTarget) -> bool:
        resolve_ref = getattr(self._lookup, "resolve_link_target", None)
        if resolve_ref is None:
            return True
        ref = resolve_ref(target)
        if ref is None:
            return False
        if isinstance(ref, StringTarget):
            # External destinations are never checked
            return True
        # One level only: the referenced node's own verdict is trusted as-is
        if ref.node_type not in self._renderable_types:
            return False
        ref_cls = self._lookup.classify(ref)
        if not (ref_cls.renderable and ref_cls.valid):
            return False
        ref_url = self._lookup.resolve_url(ref)
        return bool(ref_url and ref_url.strip())

    # -------------------------------------------------------------- resolution

    def resolve(
        self, target: TargetRef, cross_site: bool = False
    ) -> Optional[ResolvedTarget]:
        """Resolve a renderable target to its URL; None when it has no destination."""
        if isinstance(target, StringTarget):
            url = target.value.strip()
            if not url:
                return None
            return ResolvedTarget(
                url=url,
                external=is_external_url(url, self._site_hosts),
            )
        if self._lookup is None:
            return None
        url: Optional[str] = None
        if cross_site:
            cross = getattr(self._lookup, "resolve_cross_site_url", None)
            if cross is not None:
                url = cross(target)
        if not url:
            url = self._lookup.resolve_url(target)
        if not url or not url.strip():
            return None
        is_external = getattr(self._lookup, "is_external", None)
        external = (
            bool(is_external(target))
            if is_external is not None
            else is_external_url(url, self._site_hosts)
        )
        file_info = None
        if target.node_type == "sv:file":
            get_info = getattr(self._lookup, "resolve_file_info", None)
            if get_info is not None:
                file_info = get_info(target)
        return ResolvedTarget(
            url=url,
            external=external,
            file_info=file_info,
        )

    def display_name(self, target: Optional[TargetRef]) -> Optional[str]:
        if not isinstance(target, NodeTarget) or self._lookup is None:
            return None
        name = self._lookup.resolve_display_name(target)
        return name if name and name.strip() else None
