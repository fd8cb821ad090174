"""
Catalog normalization — turns raw loader catalogs into one addressable shape.

Forge publishes its promotions as a map of annotated keys::

    {"1.20.1-latest": "47.2.20", "1.20.1-recommended": "47.2.0", ...}

which collapses to one loader version per Minecraft version.  Fabric
publishes a flat, already ordered list that passes through untouched.

Both functions treat malformed input as empty and never raise.
"""

import logging
from typing import Any

__all__ = ["LATEST_SUFFIX", "RECOMMENDED_SUFFIX", "normalize_forge_catalog", "coerce_version_list"]

logger = logging.getLogger(__name__)

LATEST_SUFFIX      = "-latest"
RECOMMENDED_SUFFIX = "-recommended"

# Higher rank wins; equal ranks keep the first entry seen.
_RANK_BARE        = 0
_RANK_RECOMMENDED = 1
_RANK_LATEST      = 2


def _split_key(key: str) -> tuple[str, int]:
    """Return (platform_version, rank) for a promotions key."""
    rank = _RANK_BARE
    if key.endswith(LATEST_SUFFIX):
        rank = _RANK_LATEST
    elif key.endswith(RECOMMENDED_SUFFIX):
        rank = _RANK_RECOMMENDED
    platform_version = key.replace(LATEST_SUFFIX, "").replace(RECOMMENDED_SUFFIX, "")
    return platform_version, rank


def normalize_forge_catalog(raw: Any) -> dict[str, str]:
    """
    Collapse Forge promotions into ``{platform_version: loader_version}``.

    Precedence per platform version: ``-latest`` > ``-recommended`` > bare
    key, independent of the iteration order of *raw*.

    Args:
        raw: Mapping of promotion keys to loader versions.  Anything that is
             not a mapping yields ``{}``; non-string keys/values are skipped.

    Returns:
        A new dict; platform versions with no matching key are absent.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Ignoring malformed Forge catalog of type %s", type(raw).__name__)
        return {}

    resolved: dict[str, str] = {}
    ranks:    dict[str, int] = {}
    for key, version in raw.items():
        if not isinstance(key, str) or not isinstance(version, str):
            logger.debug("Skipping malformed Forge entry %r: %r", key, version)
            continue
        platform_version, rank = _split_key(key)
        if platform_version not in resolved or rank > ranks[platform_version]:
            resolved[platform_version] = version
            ranks[platform_version] = rank
    return resolved


def coerce_version_list(raw: Any) -> list[str]:
    """Return *raw* as an order-preserving list of strings, or [] if malformed."""
    if not isinstance(raw, (list, tuple)):
        if raw is not None:
            logger.warning("Ignoring malformed version list of type %s", type(raw).__name__)
        return []
    return [v for v in raw if isinstance(v, str)]
