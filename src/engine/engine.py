"""
InstallerEngine — single owner of selection, log and job state.

Usage::

    engine = InstallerEngine(LocalBackend(config), listener=my_listener)
    await engine.start()                 # concurrent startup fetches
    engine.select_platform_version("1.20.1")
    engine.select_loader_family("fabric")
    status = await engine.submit()       # SubmitStatus
    engine.close()

Startup issues the app-version, platform-version, Forge, Fabric and
saved-selection requests as independent tasks.  Each one writes its own
slot and re-derives the selection when it resolves, in whatever order that
happens; a failing request is logged and leaves its slot empty.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from src.catalog.models import LoaderFamily
from .backend import AbstractBackend
from .logstream import LogStream
from .orchestrator import JobOrchestrator, SubmitStatus, validate_selection
from .selection import SelectionState, SelectionStateMachine, SelectionView
from .session import SessionBridge

__all__ = ["EngineListener", "InstallerEngine"]

logger = logging.getLogger(__name__)


class EngineListener:
    """Observer hooks; subclass and override what you need."""

    def selection_changed(self, view: SelectionView) -> None: ...

    def log_appended(self, message: str) -> None: ...

    def busy_changed(self, busy: bool) -> None: ...

    def notice(self, message: str) -> None: ...

    def app_version_changed(self, version: str) -> None: ...


class InstallerEngine:
    """Wires the selection machine, session bridge, orchestrator and log stream."""

    def __init__(self, backend: AbstractBackend,
                 listener: Optional[EngineListener] = None) -> None:
        self._backend  = backend
        self._listener = listener or EngineListener()

        self.app_version: str = ""
        self.selection    = SelectionStateMachine()
        self.log          = LogStream(on_append=lambda m: self._emit("log_appended", m))
        self.session      = SessionBridge(backend)
        self.jobs         = JobOrchestrator(
            backend, self.log, on_busy_changed=lambda b: self._emit("busy_changed", b)
        )
        self._started      = False
        self._user_touched = False

    # ── Observers ──────────────────────────────────────────────────────────

    def _emit(self, hook: str, *args: Any) -> None:
        try:
            getattr(self._listener, hook)(*args)
        except Exception:  # noqa: BLE001
            logger.exception("Listener hook %s failed", hook)

    def _selection_changed(self) -> None:
        self._emit("selection_changed", self.selection.view)

    # ── Read-only state ────────────────────────────────────────────────────

    @property
    def state(self) -> SelectionState:
        return self.selection.state

    @property
    def view(self) -> SelectionView:
        return self.selection.view

    @property
    def in_flight(self) -> bool:
        return self.jobs.in_flight

    @property
    def can_submit(self) -> bool:
        return validate_selection(self.state) is None and not self.in_flight

    # ── Startup ────────────────────────────────────────────────────────────

    async def _load(self, name: str, fetch: Callable[[], Awaitable[Any]],
                    apply: Callable[[Any], None]) -> None:
        try:
            value = await fetch()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Fetching %s failed: %s", name, exc)
            return
        apply(value)

    def _apply_app_version(self, version: Any) -> None:
        self.app_version = str(version or "")
        self._emit("app_version_changed", self.app_version)

    def _apply_catalog(self, setter: Callable[[Any], None]) -> Callable[[Any], None]:
        def apply(value: Any) -> None:
            setter(value)
            self._selection_changed()
        return apply

    async def _restore(self) -> None:
        saved = await self.session.restore()
        if saved is None:
            return
        if self._user_touched:
            logger.info("Ignoring restored selection; user already chose %s", self.state)
            return
        self.selection.restore(saved)
        self._selection_changed()

    async def start(self) -> None:
        """Subscribe to the log source and load everything concurrently. Never raises."""
        if self._started:
            return
        self._started = True
        try:
            self.log.attach(self._backend.on_log_event)
        except Exception:  # noqa: BLE001
            logger.exception("Could not subscribe to log events")

        await asyncio.gather(
            self._load("app version", self._backend.get_app_version,
                       self._apply_app_version),
            self._load("platform versions", self._backend.get_platform_versions,
                       self._apply_catalog(self.selection.set_platform_versions)),
            self._load("Forge versions", self._backend.get_forge_catalog,
                       self._apply_catalog(self.selection.set_forge_catalog)),
            self._load("Fabric versions", self._backend.get_fabric_catalog,
                       self._apply_catalog(self.selection.set_fabric_catalog)),
            self._restore(),
        )
        logger.debug("Startup complete: %s", self.state)

    # ── User actions ───────────────────────────────────────────────────────

    def select_platform_version(self, platform_version: str) -> None:
        self._user_touched = True
        self.selection.select_platform_version(platform_version)
        self._selection_changed()

    def select_loader_family(self, loader_family: "str | LoaderFamily") -> None:
        self._user_touched = True
        self.selection.select_loader_family(loader_family)
        self._selection_changed()

    def select_loader_version(self, loader_version: str) -> None:
        self._user_touched = True
        self.selection.select_loader_version(loader_version)
        self._selection_changed()

    async def submit(self) -> SubmitStatus:
        """
        Persist the current selection (not awaited) and run the installation.

        Returns the SubmitStatus; refused submissions raise a notice on the
        listener instead of an exception.
        """
        state = self.state
        problem = validate_selection(state)
        if problem is not None:
            self._emit("notice", problem)
            return SubmitStatus.INVALID
        if self.in_flight:
            self._emit("notice", "An installation is already running.")
            return SubmitStatus.BUSY

        self.session.persist(state)
        return await self.jobs.submit(state)

    # ── Teardown ───────────────────────────────────────────────────────────

    async def drain(self) -> None:
        await self.session.drain()

    def close(self) -> None:
        """Release the log subscription."""
        self.log.detach()
