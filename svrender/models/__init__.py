from .site import (
    DecorationModel,
    LinkDestination,
    SiteDocument,
    SiteInfo,
    SiteNode,
    SourceSetEntry,
    load_site,
    parse_site,
)

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
