"""
UpstreamCatalogSource — thin `requests` wrapper around the public catalogs.

Usage::

    source = UpstreamCatalogSource(AppConfig())
    releases = await source.fetch_platform_versions()
    promos   = await source.fetch_forge_promotions()
    fabric   = await source.fetch_fabric_versions()

Each fetch runs the blocking request in a worker thread and raises
CatalogFetchError on any transport, HTTP or JSON failure.  The parse_*
helpers are pure and tolerate malformed payloads.
"""

import asyncio
import logging
from typing import Any, Optional

import requests

from src.config import AppConfig
from src.exceptions import CatalogFetchError

__all__ = [
    "UpstreamCatalogSource",
    "parse_release_versions",
    "parse_forge_promotions",
    "parse_fabric_versions",
]

logger = logging.getLogger(__name__)

_USER_AGENT = "mod-loader-installer"


# ── Payload parsers ───────────────────────────────────────────────────────────


def parse_release_versions(manifest: Any) -> list[str]:
    """Mojang version manifest → ids of ``release`` entries, manifest order."""
    if not isinstance(manifest, dict):
        return []
    entries = manifest.get("versions")
    if not isinstance(entries, list):
        return []
    return [
        e["id"] for e in entries
        if isinstance(e, dict) and e.get("type") == "release" and isinstance(e.get("id"), str)
    ]


def parse_forge_promotions(payload: Any) -> dict[str, str]:
    """promotions_slim.json → the raw ``promos`` mapping."""
    if not isinstance(payload, dict):
        return {}
    promos = payload.get("promos")
    return dict(promos) if isinstance(promos, dict) else {}


def parse_fabric_versions(payload: Any) -> list[str]:
    """Fabric installer meta → installer version strings, upstream order."""
    if not isinstance(payload, list):
        return []
    return [
        e["version"] for e in payload
        if isinstance(e, dict) and isinstance(e.get("version"), str)
    ]


# ── Source ────────────────────────────────────────────────────────────────────


class UpstreamCatalogSource:
    """Fetches raw catalogs from the Mojang, Forge and Fabric endpoints."""

    def __init__(self, config: AppConfig,
                 session: Optional[requests.Session] = None) -> None:
        self._config  = config
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = _USER_AGENT

    def _get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._config.http_timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise CatalogFetchError(f"GET {url} failed: {exc}") from exc

    async def _fetch(self, url: str) -> Any:
        return await asyncio.to_thread(self._get_json, url)

    async def fetch_platform_versions(self) -> list[str]:
        return parse_release_versions(await self._fetch(self._config.manifest_url))

    async def fetch_forge_promotions(self) -> dict[str, str]:
        return parse_forge_promotions(await self._fetch(self._config.forge_url))

    async def fetch_fabric_versions(self) -> list[str]:
        return parse_fabric_versions(await self._fetch(self._config.fabric_url))
