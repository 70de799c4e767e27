"""
Pydantic models for a JSON site description.

A site description lists the content nodes a renderer may point at together
with the site-level decoration settings. It stands in for a content repository
in tests and in the command-line preview tool.

Field names are camelCase on the wire (``displayName``, ``sourceSet``) and
snake_case in Python.
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from ..exceptions import SiteModelError


def _env_extra_mode(default: str = "ignore") -> str:
    """
    Determine the extra-mode from environment vars.

    SVRENDER_SITE_EXTRA: allow|forbid|ignore
    Convenience booleans: "true/1/on" -> forbid (strict), "false/0/off" -> allow
    """
    raw = (os.getenv("SVRENDER_SITE_EXTRA") or default).strip().lower()

    if raw in {"allow", "forbid", "ignore"}:
        return raw
    if raw in {"1", "true", "yes", "on", "strict"}:
        return "forbid"
    if raw in {"0", "false", "no", "off", "lenient"}:
        return "allow"
    return default


_EXTRA = _env_extra_mode()


class SiteModel(BaseModel):
    """Base class providing camel-case aliases and population by name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra=_EXTRA,
    )


class SourceSetEntry(SiteModel):
    url: str
    width: int = Field(..., gt=0)


class LinkDestination(SiteModel):
    """Where an sv:link / sv:structureLink points: another node or a plain URL."""

    node: Optional[str] = None
    url: Optional[str] = None


class SiteNode(SiteModel):
    id: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    """Primary node type, e.g. "sv:page"."""

    display_name: Optional[str] = None
    url: Optional[str] = None
    trashed: bool = False
    site: Optional[str] = None
    """Owning site name when the node lives on another site."""

    # Users and identities
    mail: Optional[str] = None
    profile_url: Optional[str] = None

    # Links
    link_target: Optional[LinkDestination] = None

    # Files
    extension: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=0)
    file_description: Optional[str] = None

    # Images
    description: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    source_set: List[SourceSetEntry] = Field(default_factory=list)
    scalable: bool = True

    # Font settings
    font_class: Optional[str] = None


class DecorationModel(SiteModel):
    show_external_link_icon: bool = False
    show_new_window_icon: bool = False
    show_file_type_icon: bool = False
    show_file_type_description: bool = False


class SiteInfo(SiteModel):
    name: str = "site"
    hosts: List[str] = Field(default_factory=list)
    decoration: DecorationModel = Field(default_factory=DecorationModel)
    sites: Dict[str, str] = Field(default_factory=dict)
    """Base URLs of other sites, keyed by site name (cross-site links)."""


class SiteDocument(SiteModel):
    site: SiteInfo = Field(default_factory=SiteInfo)
    nodes: List[SiteNode] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self) -> "SiteDocument":
        seen = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"duplicate node id {node.id!r}")
            seen.add(node.id)
        return self


def parse_site(data, source: str = "") -> SiteDocument:
    try:
        return SiteDocument.model_validate(data)
    except ValidationError as e:
        raise SiteModelError(str(e), source=source) from e


def load_site(path: str) -> SiteDocument:
    """Load and validate a site description from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SiteModelError(f"cannot read site description: {e}", source=path) from e
    except json.JSONDecodeError as e:
        raise SiteModelError(f"invalid JSON: {e}", source=path) from e
    return parse_site(data, source=path)


__all__ = [
    "DecorationModel",
    "LinkDestination",
    "SiteDocument",
    "SiteInfo",
    "SiteNode",
    "SourceSetEntry",
    "load_site",
    "parse_site",
]
