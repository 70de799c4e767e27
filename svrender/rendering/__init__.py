"""Stateful link and image markup rendering, transport-agnostic.

Contains:
- renderer_iface: target references and the lookup Protocols the renderers call
- options: immutable renderer defaults and mode enums
- link_renderer / image_renderer / image_link_renderer: the reusable renderers
- exporter: batch helpers (link lists, galleries, preview pages)
- site_datasource: in-memory datasource over a JSON site description
"""
