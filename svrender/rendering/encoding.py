"""Render-time text and parameter encoding."""

from __future__ import annotations

import html
from typing import Mapping, Optional
from urllib.parse import quote_plus


def encode_text(value: Optional[str], enabled: bool) -> str:
    if value is None:
        return ""
    if not enabled:
        return value
    return html.escape(value, quote=True)


def encode_param(value: Optional[str], enabled: bool) -> str:
    if value is None:
        return ""
    if not enabled:
        return value
    return quote_plus(value)


def append_parameters(
    url: str, params: Mapping[Optional[str], Optional[str]], enabled: bool
) -> str:
    """Append ``params`` as a query string to ``url``, keeping any fragment last.

    Keys that are None or blank are skipped; a None value is sent as empty.
    """
    pairs = []
    for key, value in params.items():
        if key is None or not key.strip():
            continue
        pairs.append(f"{encode_param(key, enabled)}={encode_param(value, enabled)}")
    if not pairs:
        return url
    base, sep, fragment = url.partition("#")
    if "?" not in base:
        joiner = "?"
    elif base.endswith("?") or base.endswith("&"):
        joiner = ""
    else:
        joiner = "&"
    out = base + joiner + "&".join(pairs)
    if sep:
        out += "#" + fragment
    return out
