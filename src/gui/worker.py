"""
EngineWorker — hosts InstallerEngine on an asyncio loop inside a QThread.

Usage (MainWindow)::

    self._worker = EngineWorker(backend)
    self._thread = EngineThread(self._worker)
    self._worker.selection_changed.connect(self._on_selection_changed)
    self._worker.log_appended.connect(self._page.append_log)
    self._worker.busy_changed.connect(self._on_busy_changed)
    self._thread.start()

The worker object stays in the GUI thread; only its asyncio loop runs on
EngineThread, so the loop is never blocked behind a Qt event queue.  All
engine state lives on that loop.  GUI actions are marshalled onto it with
call_soon_threadsafe / run_coroutine_threadsafe; engine events come back as
signals (queued across threads by Qt).

Signals
───────
selection_changed(SelectionView) — options or selection re-derived
log_appended(str)                — one log line, receipt order
busy_changed(bool)               — installation in-flight flag
notice(str)                      — user-facing validation message
app_version_changed(str)         — footer version
submit_finished(str)             — SubmitStatus value of a finished submit
"""

import asyncio
import logging
from concurrent.futures import Future
from typing import Any, Callable

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from src.engine.backend import AbstractBackend
from src.engine.engine import EngineListener, InstallerEngine
from src.engine.selection import SelectionView
from src.exceptions import SelectionError

__all__ = ["EngineWorker", "EngineThread"]

logger = logging.getLogger(__name__)


class _SignalListener(EngineListener):
    """Forwards engine hooks to the worker's Qt signals."""

    def __init__(self, worker: "EngineWorker") -> None:
        self._worker = worker

    def selection_changed(self, view: SelectionView) -> None:
        self._worker.selection_changed.emit(view)

    def log_appended(self, message: str) -> None:
        self._worker.log_appended.emit(message)

    def busy_changed(self, busy: bool) -> None:
        self._worker.busy_changed.emit(busy)

    def notice(self, message: str) -> None:
        self._worker.notice.emit(message)

    def app_version_changed(self, version: str) -> None:
        self._worker.app_version_changed.emit(version)


class EngineWorker(QObject):
    """Owns the asyncio loop and the InstallerEngine running on it."""

    selection_changed   = pyqtSignal(object)
    log_appended        = pyqtSignal(str)
    busy_changed        = pyqtSignal(bool)
    notice              = pyqtSignal(str)
    app_version_changed = pyqtSignal(str)
    submit_finished     = pyqtSignal(str)

    def __init__(self, backend: AbstractBackend) -> None:
        super().__init__()
        self._loop   = asyncio.new_event_loop()
        self._engine = InstallerEngine(backend, listener=_SignalListener(self))

    @property
    def engine(self) -> InstallerEngine:
        return self._engine

    def run(self) -> None:
        """Run the engine loop on the calling thread. Blocks until stop()."""
        asyncio.set_event_loop(self._loop)
        self._loop.create_task(self._engine.start())
        try:
            self._loop.run_forever()
        finally:
            self._engine.close()
            pending = [t for t in asyncio.all_tasks(self._loop) if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                self._loop.run_until_complete(
                    asyncio.gather(*pending, return_exceptions=True)
                )
            self._loop.close()
            logger.debug("Engine loop closed")

    def stop(self) -> None:
        """Ask the loop to stop; safe to call from any thread."""
        if not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._loop.stop)

    # ── GUI → engine ───────────────────────────────────────────────────────

    def _call(self, fn: Callable[..., Any], *args: Any) -> None:
        def invoke() -> None:
            try:
                fn(*args)
            except SelectionError as exc:
                logger.warning("Selection ignored: %s", exc)
        self._loop.call_soon_threadsafe(invoke)

    def select_platform_version(self, platform_version: str) -> None:
        self._call(self._engine.select_platform_version, platform_version)

    def select_loader_family(self, loader_family: str) -> None:
        self._call(self._engine.select_loader_family, loader_family)

    def select_loader_version(self, loader_version: str) -> None:
        self._call(self._engine.select_loader_version, loader_version)

    def submit(self) -> Future:
        future = asyncio.run_coroutine_threadsafe(self._engine.submit(), self._loop)
        future.add_done_callback(self._on_submit_done)
        return future

    def _on_submit_done(self, future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("submit() raised: %s", exc)
            return
        self.submit_finished.emit(future.result().value)


class EngineThread(QThread):
    """QThread whose run() is the worker's asyncio loop; finishes when the loop stops."""

    def __init__(self, worker: EngineWorker, parent: QObject = None) -> None:
        super().__init__(parent)
        self._worker = worker

    def run(self) -> None:
        self._worker.run()
