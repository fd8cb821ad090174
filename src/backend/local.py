"""
LocalBackend — the in-process collaborator behind InstallerEngine.

Composes the upstream catalog source, the SQLite selection store, the log
event bus and the installer job.  Catalog getters announce progress on the
bus and re-raise failures; the engine decides how to degrade.  The store is
opened lazily, so a bad database path surfaces as a StoreError from the
persistence calls rather than from the constructor.
"""

import asyncio
import logging
from importlib import metadata
from typing import Awaitable, Callable, Optional

from src.catalog.models import LoaderFamily
from src.catalog.sources import UpstreamCatalogSource
from src.config import APP_NAME, APP_VERSION, AppConfig
from src.engine.backend import AbstractBackend, LogHandler, Unsubscribe
from src.engine.selection import SelectionState
from src.store.db import SelectionStore
from src.store.models import SavedSelection
from .events import LogEventBus
from .installer import InstallRequest, JavaInstallerJob

__all__ = ["LocalBackend"]

logger = logging.getLogger(__name__)

InstallJob = Callable[[InstallRequest], Awaitable[None]]


class LocalBackend(AbstractBackend):
    """Reference backend: HTTP catalogs, SQLite persistence, Java installer."""

    def __init__(
        self,
        config: AppConfig,
        source: Optional[UpstreamCatalogSource] = None,
        store: Optional[SelectionStore] = None,
        bus: Optional[LogEventBus] = None,
        job: Optional[InstallJob] = None,
    ) -> None:
        self._config = config
        self._source = source or UpstreamCatalogSource(config)
        self._store  = store
        self.bus     = bus or LogEventBus()
        self._job    = job or JavaInstallerJob(
            java_cmd=config.java_cmd,
            minecraft_dir=config.minecraft_dir,
            publish=self.bus.publish,
            http_timeout=config.http_timeout,
        )

    # ── Catalogs ──────────────────────────────────────────────────────────

    async def _announce(self, label: str, fetch: Callable[[], Awaitable]):
        self.bus.publish(f"Fetching {label} versions...")
        try:
            result = await fetch()
        except Exception as exc:
            self.bus.publish(f"Error fetching {label} versions: {exc}")
            raise
        self.bus.publish(f"{label} versions fetched.")
        return result

    async def get_app_version(self) -> str:
        try:
            return metadata.version(APP_NAME)
        except metadata.PackageNotFoundError:
            return APP_VERSION

    async def get_platform_versions(self) -> list[str]:
        return await self._announce("Minecraft", self._source.fetch_platform_versions)

    async def get_forge_catalog(self) -> dict[str, str]:
        return await self._announce("Forge", self._source.fetch_forge_promotions)

    async def get_fabric_catalog(self) -> list[str]:
        return await self._announce("Fabric", self._source.fetch_fabric_versions)

    # ── Persistence ───────────────────────────────────────────────────────

    def _open_store(self) -> SelectionStore:
        # Opened on first use so an unusable db path only fails persistence.
        if self._store is None:
            self._store = SelectionStore(self._config.db_path)
        return self._store

    async def get_saved_selection(self) -> Optional[SavedSelection]:
        return await asyncio.to_thread(lambda: self._open_store().load())

    async def save_selection(self, state: SelectionState) -> None:
        await asyncio.to_thread(lambda: self._open_store().save(state))

    # ── Installation ──────────────────────────────────────────────────────

    async def submit_installation(
        self,
        platform_version: str,
        loader_family: LoaderFamily,
        loader_version: str,
    ) -> None:
        family = LoaderFamily.parse(loader_family)
        request = InstallRequest(platform_version, family, loader_version)
        self.bus.publish("Starting installation...")
        self.bus.publish(
            f"Minecraft version: {platform_version}, mod loader: {family.label}, "
            f"loader version: {loader_version}"
        )
        if request.is_installed(self._config.minecraft_dir):
            self.bus.publish(
                f"{family.label} {loader_version} is already installed "
                f"({request.version_id}), skipping."
            )
            return
        self.bus.publish(f"Installing {family.label}...")
        await self._job(request)
        self.bus.publish("Installation process finished.")

    # ── Log events ────────────────────────────────────────────────────────

    def on_log_event(self, handler: LogHandler) -> Unsubscribe:
        return self.bus.subscribe(handler)
