"""
SessionBridge — restores the last selection at startup and persists it on submit.

Neither direction is allowed to fail the caller: restore() degrades to
"nothing saved" and persist() is fire-and-forget with failures logged.
"""

import asyncio
import logging
from typing import Any, Optional

from src.catalog.models import LoaderFamily
from src.exceptions import SelectionError
from .backend import AbstractBackend
from .selection import SelectionState

__all__ = ["SessionBridge", "coerce_saved_selection"]

logger = logging.getLogger(__name__)

# Legacy persisted field names → SelectionState field names
_LEGACY_KEYS = {
    "minecraft_version":  "platform_version",
    "mod_loader":         "loader_family",
    "mod_loader_version": "loader_version",
}


def coerce_saved_selection(raw: Any) -> Optional[SelectionState]:
    """
    Turn whatever the backend returned into a SelectionState, or None.

    Accepts a SelectionState, an object exposing a ``.state`` SelectionState
    (e.g. a store record), or a mapping keyed by either field-name style.
    A selection with no platform version counts as nothing saved.
    """
    if raw is None:
        return None
    if isinstance(raw, SelectionState):
        state = raw
    elif isinstance(getattr(raw, "state", None), SelectionState):
        state = raw.state
    elif isinstance(raw, dict):
        data = {_LEGACY_KEYS.get(k, k): v for k, v in raw.items()}
        platform_version = data.get("platform_version") or ""
        loader_version   = data.get("loader_version") or ""
        if not isinstance(platform_version, str) or not isinstance(loader_version, str):
            return None
        try:
            family = LoaderFamily.parse(data.get("loader_family") or LoaderFamily.FORGE)
        except SelectionError:
            logger.warning("Saved selection has unknown loader %r", data.get("loader_family"))
            return None
        state = SelectionState(platform_version, family, loader_version)
    else:
        logger.warning("Ignoring malformed saved selection of type %s", type(raw).__name__)
        return None
    return state if state.platform_version else None


class SessionBridge:
    """Restore/persist the user's selection through the backend."""

    def __init__(self, backend: AbstractBackend) -> None:
        self._backend = backend
        self._pending: set[asyncio.Task] = set()

    async def restore(self) -> Optional[SelectionState]:
        try:
            raw = await self._backend.get_saved_selection()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not restore saved selection: %s", exc)
            return None
        state = coerce_saved_selection(raw)
        if state is not None:
            logger.info("Restored selection: %s", state)
        return state

    def persist(self, state: SelectionState) -> asyncio.Task:
        """Schedule save_selection(state) without waiting for it. Needs a running loop."""
        task = asyncio.get_running_loop().create_task(self._save(state))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _save(self, state: SelectionState) -> None:
        try:
            await self._backend.save_selection(state)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not save selection %s: %s", state, exc)
        else:
            logger.debug("Saved selection: %s", state)

    async def drain(self) -> None:
        """Wait for every persist() still in progress."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
