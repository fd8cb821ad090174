"""
catalog — loader families, catalog normalization and upstream catalog access.

Public API
──────────
LoaderFamily             — the two supported mod-loader ecosystems
normalize_forge_catalog  — annotated Forge promotions → one version per MC version
coerce_version_list      — tolerant list coercion (Fabric / platform versions)
UpstreamCatalogSource    — HTTP fetcher for the raw catalogs
"""

from .models import LoaderFamily
from .normalizer import coerce_version_list, normalize_forge_catalog
from .sources import (
    UpstreamCatalogSource,
    parse_fabric_versions,
    parse_forge_promotions,
    parse_release_versions,
)

__all__ = [
    "LoaderFamily",
    "normalize_forge_catalog",
    "coerce_version_list",
    "UpstreamCatalogSource",
    "parse_release_versions",
    "parse_forge_promotions",
    "parse_fabric_versions",
]
