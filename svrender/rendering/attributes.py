"""
Ordered, name-keyed attribute collections for a single markup element.

An AttributeSet never raises on bad input: blank names and names holding
characters not allowed in markup (whitespace, quotes, `<`, `>`, `/`, `=`)
are dropped, a blank value yields a valueless attribute, and setting a name
twice replaces the earlier value in place.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

DATA_PREFIX = "data-"
ARIA_PREFIX = "aria-"

# Characters that cannot appear in an html attribute name
_INVALID_NAME_CHARS = re.compile(r"[\s\x00-\x1f\x7f\"'<>/=]")


def normalize_name(name: Optional[str], prefix: str = "") -> Optional[str]:
    """Return the emitted attribute name, or None if the name must be ignored."""
    if name is None:
        return None
    n = name.strip()
    if not n or _INVALID_NAME_CHARS.search(n):
        return None
    if prefix:
        bare = prefix.rstrip("-")
        if n.lower() in (prefix, bare):
            return None
        if not n.lower().startswith(prefix):
            n = prefix + n
    return n


class AttributeSet:
    """Named string attributes, optionally restricted to one prefix namespace."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix
        self._attrs: Dict[str, Optional[str]] = {}

    def set(self, name: Optional[str], value: Optional[str]) -> None:
        key = normalize_name(name, self.prefix)
        if key is None:
            return
        self._attrs[key] = value

    def set_prefixed(
        self, prefix: str, name: Optional[str], value: Optional[str]
    ) -> None:
        key = normalize_name(name, prefix)
        if key is None:
            return
        self._attrs[key] = value

    def update(self, other: "AttributeSet") -> None:
        for k, v in other.items():
            self._attrs[k] = v

    def remove(self, name: Optional[str]) -> None:
        key = normalize_name(name, self.prefix)
        if key is not None:
            self._attrs.pop(key, None)

    def clear(self) -> None:
        self._attrs.clear()

    def get(self, name: str) -> Optional[str]:
        return self._attrs.get(name)

    def items(self) -> List[Tuple[str, Optional[str]]]:
        return list(self._attrs.items())

    def copy(self) -> "AttributeSet":
        dup = AttributeSet(self.prefix)
        dup._attrs = dict(self._attrs)
        return dup

    def __contains__(self, name: object) -> bool:
        return name in self._attrs

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeSet):
            return NotImplemented
        return self.prefix == other.prefix and self.items() == other.items()

    def __repr__(self) -> str:
        return f"AttributeSet(prefix={self.prefix!r}, attrs={self._attrs!r})"

    def ordered(self, order: Iterable[str] = ()) -> List[Tuple[str, Optional[str]]]:
        """Names listed in ``order`` first (in that order), then the rest as inserted."""
        out: List[Tuple[str, Optional[str]]] = []
        seen = set()
        for name in order:
            if name in self._attrs and name not in seen:
                out.append((name, self._attrs[name]))
                seen.add(name)
        for name, value in self._attrs.items():
            if name not in seen:
                out.append((name, value))
        return out

    def render(
        self,
        order: Iterable[str] = (),
        encode: Optional[Callable[[str], str]] = None,
    ) -> str:
        """Return the attribute text with a leading space, or "" when empty."""
        parts: List[str] = []
        for name, value in self.ordered(order):
            if value is None or not value.strip():
                parts.append(name)
                continue
            v = encode(value) if encode else value
            parts.append(f'{name}="{v}"')
        return (" " + " ".join(parts)) if parts else ""
