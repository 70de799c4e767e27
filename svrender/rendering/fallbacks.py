"""
Human-facing text resolution (link text/title, image alt/title).

Each value is resolved at render time through a prioritized chain: the
explicit value, then a derived value (target display name or image metadata)
when the relevant setting allows it, then a structural fallback, then "".
"""

from __future__ import annotations

from typing import Optional

from .renderer_iface import MetadataLookup, NodeTarget
from .state import ImageRenderState, LinkRenderState
from .targets import TargetResolver


def lenient_truncate(text: str, limit: int, ellipsis: str = "") -> str:
    """Cut ``text`` at the last complete word at-or-before ``limit`` characters."""
    if limit <= 0 or len(text) <= limit:
        return text
    cut = text[: limit + 1]
    space = cut.rfind(" ")
    if space <= 0:
        # A single overlong word: hard cut
        return text[:limit].rstrip() + ellipsis
    return cut[:space].rstrip() + ellipsis


def _present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


class TextFallbackResolver:
    def __init__(
        self,
        targets: TargetResolver,
        metadata: Optional[MetadataLookup] = None,
        max_auto_title_length: Optional[int] = None,
    ):
        self._targets = targets
        self._metadata = metadata
        self._max_auto_title_length = max_auto_title_length

    # ------------------------------------------------------------------- links

    def resolve_text(self, state: LinkRenderState) -> str:
        if _present(state.text):
            return state.text  # type: ignore[return-value]
        return self._targets.display_name(state.target) or ""

    def resolve_title(self, state: LinkRenderState, text: Optional[str] = None) -> str:
        if _present(state.title):
            return state.title  # type: ignore[return-value]
        if state.settings.use_auto_title:
            derived = self._targets.display_name(state.target)
            if derived:
                if self._max_auto_title_length:
                    derived = lenient_truncate(derived, self._max_auto_title_length)
                return derived
        if text is None:
            text = state.text
        return text if _present(text) else ""  # type: ignore[return-value]

    # ------------------------------------------------------------------ images

    def _metadata_description(self, image: Optional[NodeTarget]) -> str:
        if image is None or self._metadata is None:
            return ""
        value = self._metadata.get_description(image)
        return value if _present(value) else ""  # type: ignore[return-value]

    def resolve_alt_or_description(self, state: ImageRenderState) -> str:
        if _present(state.description):
            return state.description  # type: ignore[return-value]
        if state.settings.use_auto_description:
            return self._metadata_description(state.image)
        return ""

    def resolve_image_title(self, state: ImageRenderState) -> Optional[str]:
        """None when no title attribute should be rendered at all."""
        s = state.settings
        if not s.use_title_rendering:
            return None
        if _present(state.description):
            return state.description
        if s.use_auto_description or s.use_auto_title:
            return self._metadata_description(state.image)
        return ""
