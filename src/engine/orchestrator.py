"""
JobOrchestrator — runs at most one installation job at a time.

Lifecycle of the in-flight flag::

    False ──submit(valid)──▶ True ──job resolves / raises──▶ False

Invalid or concurrent submissions are refused before dispatch and leave the
flag untouched.  Job failures become log entries; they are never re-raised.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from .backend import AbstractBackend
from .logstream import LogStream
from .selection import SelectionState

__all__ = ["SubmitStatus", "JobOrchestrator", "validate_selection"]

logger = logging.getLogger(__name__)

MSG_MISSING_PLATFORM = "Please select a Minecraft version."
MSG_MISSING_LOADER   = "Please select a mod loader version."


class SubmitStatus(str, Enum):
    COMPLETED = "completed"
    FAILED    = "failed"
    INVALID   = "invalid"     # refused: required field empty
    BUSY      = "busy"        # refused: another job in flight


def validate_selection(state: SelectionState) -> Optional[str]:
    """Return a user-facing message if *state* cannot be submitted, else None."""
    if not state.platform_version:
        return MSG_MISSING_PLATFORM
    if not state.loader_version:
        return MSG_MISSING_LOADER
    return None


class JobOrchestrator:
    """Guards and dispatches the installation job."""

    def __init__(
        self,
        backend: AbstractBackend,
        log_stream: LogStream,
        on_busy_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self._backend   = backend
        self._log       = log_stream
        self._on_busy   = on_busy_changed
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def _set_in_flight(self, value: bool) -> None:
        self._in_flight = value
        if self._on_busy is not None:
            try:
                self._on_busy(value)
            except Exception:  # noqa: BLE001
                logger.exception("busy-changed callback failed")

    async def submit(self, state: SelectionState) -> SubmitStatus:
        """Validate, dispatch and settle one installation job."""
        problem = validate_selection(state)
        if problem is not None:
            logger.info("Submission rejected: %s", problem)
            return SubmitStatus.INVALID
        if self._in_flight:
            logger.info("Submission rejected: an installation is already running")
            return SubmitStatus.BUSY

        self._set_in_flight(True)
        try:
            logger.info("Dispatching installation: %s", state)
            await self._backend.submit_installation(
                state.platform_version, state.loader_family, state.loader_version
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Installation failed for %s", state)
            self._log.append(f"Installation failed: {exc}")
            return SubmitStatus.FAILED
        else:
            self._log.append(
                f"{state.loader_family.label} {state.loader_version} installed "
                f"for Minecraft {state.platform_version}."
            )
            return SubmitStatus.COMPLETED
        finally:
            self._set_in_flight(False)
