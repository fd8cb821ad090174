"""
MainWindow — top-level application window for the mod loader installer.

Hosts InstallerPage and the EngineWorker thread.  The worker is not started
by the constructor; call start() once the window is shown.
"""

import logging
from typing import Optional

from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QWidget

from src.config import AppConfig
from src.engine.backend import AbstractBackend
from src.gui.pages.installer import InstallerPage
from src.gui.worker import EngineThread, EngineWorker

__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Root window: hosts InstallerPage and wires it to the engine worker."""

    def __init__(self, backend: Optional[AbstractBackend] = None,
                 config: Optional[AppConfig] = None,
                 parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Mod Loader Installer")
        self.resize(560, 520)

        if backend is None:
            from src.backend.local import LocalBackend
            backend = LocalBackend(config or AppConfig.from_env())

        self._page = InstallerPage()
        self.setCentralWidget(self._page)

        # Worker / thread references, kept alive for the window lifetime
        self._worker = EngineWorker(backend)
        self._thread: EngineThread | None = None

        self._connect_signals()

    # ── Wiring ─────────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        page, worker = self._page, self._worker

        page.platform_selected.connect(worker.select_platform_version)
        page.family_selected.connect(worker.select_loader_family)
        page.loader_version_selected.connect(worker.select_loader_version)
        page.submit_requested.connect(self._on_submit_requested)

        worker.selection_changed.connect(page.apply_view)
        worker.log_appended.connect(page.append_log)
        worker.busy_changed.connect(page.set_busy)
        worker.app_version_changed.connect(page.set_app_version)
        worker.notice.connect(self._on_notice)

    # ── Worker lifecycle ───────────────────────────────────────────────────

    def start(self) -> None:
        """Start the engine thread (startup fetches begin immediately)."""
        if self._thread is not None:
            return
        self._thread = EngineThread(self._worker)
        self._thread.start()

    def shutdown(self) -> None:
        if self._thread is None:
            return
        self._worker.stop()
        self._thread.wait(3000)  # wait up to 3s
        self._thread = None

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.shutdown()
        super().closeEvent(event)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_submit_requested(self) -> None:
        # Disable immediately; busy_changed re-renders once the engine settles.
        self._page.set_busy(True)
        self._worker.submit().add_done_callback(
            lambda _f: self._worker.busy_changed.emit(self._worker.engine.in_flight)
        )

    def _on_notice(self, message: str) -> None:
        QMessageBox.information(self, "Mod Loader Installer", message)
