"""
Element assembly shared by the stateful renderers.

Attributes are emitted in a fixed schema order so identical state always
yields identical markup. Attribute text is built by hand (rather than through
an HTML builder) because encoding is a per-renderer toggle.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Optional

from .attributes import AttributeSet
from .encoding import encode_text

LOGGER = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset({"img", "br", "hr", "input", "source", "meta", "link"})


class RenderPhase(Enum):
    EMPTY = "empty"  # mandatory data missing
    PARTIAL = "partial"  # mandatory data present, not rendered since last change
    RENDERED = "rendered"  # rendered, no change since


def _encode_attr(value: str) -> str:
    return encode_text(value, True)


def assemble(
    tag: str,
    attributes: AttributeSet,
    order: Iterable[str] = (),
    inner: Optional[str] = None,
    encode: bool = True,
) -> str:
    """Emit one element. ``inner`` is inserted as-is (callers encode text themselves)."""
    attr_text = attributes.render(order, _encode_attr if encode else None)
    if tag in VOID_ELEMENTS:
        return f"<{tag}{attr_text}>"
    return f"<{tag}{attr_text}>{inner or ''}</{tag}>"


class StatefulRenderer:
    """Base for renderers that keep state between render calls.

    Subclasses implement ``_has_mandatory`` and ``_render``; ``render`` never
    raises and returns "" whenever ``_render`` cannot produce markup.
    Instances are not thread-safe; use one renderer per thread.
    """

    _op = "render"

    def __init__(self) -> None:
        self._rendered = False

    def _touch(self) -> None:
        self._rendered = False

    def _has_mandatory(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def _render(self) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    @property
    def is_rendered(self) -> bool:
        """True when rendered and not changed since."""
        return self._rendered

    @property
    def phase(self) -> RenderPhase:
        if not self._has_mandatory():
            return RenderPhase.EMPTY
        return RenderPhase.RENDERED if self._rendered else RenderPhase.PARTIAL

    def render(self) -> str:
        if not self._has_mandatory():
            return ""
        return self._guarded(self._render)

    def _guarded(self, build: Callable[[], Optional[str]]) -> str:
        try:
            out = build() or ""
        except Exception:
            LOGGER.debug(
                "%s failed",
                self._op,
                exc_info=True,
                extra={"component": "render", "op": self._op},
            )
            out = ""
        self._rendered = True
        return out
