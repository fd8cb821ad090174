"""
InstallerPage — the single page of the installer GUI.

Three dependent dropdowns, an install button, the live log and a version
footer.  The page only renders InstallerViewModel / LogViewModel and
re-emits user choices as signals; MainWindow forwards them to the engine.

Layout
──────
  ┌─────────────────────────────────────────┐
  │ Minecraft: [1.20.1               ▼]     │
  │ Loader:    [Forge                ▼]     │
  │ Version:   [47.2.0               ▼]     │
  │                              [Install]  │
  │ ┌─────────────────────────────────────┐ │
  │ │ Fetching Forge versions...          │ │
  │ │ Forge versions fetched.             │ │
  │ └─────────────────────────────────────┘ │
  │ Version v0.1.0                          │
  └─────────────────────────────────────────┘
"""

import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.engine.selection import SelectionView
from src.gui.viewmodels import InstallerViewModel, LogViewModel

__all__ = ["InstallerPage"]

logger = logging.getLogger(__name__)

_PLATFORM_PLACEHOLDER = "Select Minecraft Version"
_LOADER_PLACEHOLDER   = "Select Mod Version"


class InstallerPage(QWidget):
    """
    Selection form + log panel.

    Signals emitted by this page (connected by MainWindow):
      • platform_selected(str)        — user picked a Minecraft version ("" = none)
      • family_selected(str)          — user picked a loader family value
      • loader_version_selected(str)  — user picked a loader version ("" = none)
      • submit_requested()            — user clicked Install
    """

    platform_selected       = pyqtSignal(str)
    family_selected         = pyqtSignal(str)
    loader_version_selected = pyqtSignal(str)
    submit_requested        = pyqtSignal()

    def __init__(self, parent: QWidget = None) -> None:
        super().__init__(parent)
        self._vm     = InstallerViewModel()
        self._log_vm = LogViewModel()
        self._build_ui()
        self.render()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        layout.addWidget(QLabel("<b>Install a Mod Loader</b>"))

        form = QFormLayout()
        self._platform_combo = QComboBox()
        self._platform_combo.activated.connect(self._on_platform_activated)
        form.addRow("Minecraft:", self._platform_combo)

        self._family_combo = QComboBox()
        for family in self._vm.loader_families:
            self._family_combo.addItem(family.label, family.value)
        self._family_combo.activated.connect(self._on_family_activated)
        form.addRow("Loader:", self._family_combo)

        self._loader_combo = QComboBox()
        self._loader_combo.activated.connect(self._on_loader_activated)
        form.addRow("Version:", self._loader_combo)
        layout.addLayout(form)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        self._submit_btn = QPushButton("Install")
        self._submit_btn.clicked.connect(self.submit_requested)
        btn_row.addWidget(self._submit_btn)
        layout.addLayout(btn_row)

        self._log_view = QPlainTextEdit()
        self._log_view.setReadOnly(True)
        self._log_view.setPlaceholderText("Installer output will appear here…")
        layout.addWidget(self._log_view)

        self._footer = QLabel()
        layout.addWidget(self._footer)

    # ── Slots (user input) ─────────────────────────────────────────────────

    def _on_platform_activated(self, index: int) -> None:
        self.platform_selected.emit(self._platform_combo.itemData(index) or "")

    def _on_family_activated(self, index: int) -> None:
        self.family_selected.emit(self._family_combo.itemData(index))

    def _on_loader_activated(self, index: int) -> None:
        self.loader_version_selected.emit(self._loader_combo.itemData(index) or "")

    # ── Public helpers ──────────────────────────────────────────────────────

    def apply_view(self, view: SelectionView) -> None:
        self._vm.apply_view(view)
        self.render()

    def set_busy(self, busy: bool) -> None:
        self._vm.busy = busy
        self.render()

    def set_app_version(self, version: str) -> None:
        self._vm.app_version = version
        self.render()

    def append_log(self, message: str) -> None:
        """Append a line, then scroll to it."""
        self._log_vm.append_log(message)
        self._log_view.appendPlainText(message)
        bar = self._log_view.verticalScrollBar()
        bar.setValue(bar.maximum())

    def render(self) -> None:
        """Sync every widget with the view-models."""
        vm = self._vm
        self._fill(self._platform_combo, _PLATFORM_PLACEHOLDER,
                   vm.platform_versions, vm.selection.platform_version)
        self._family_combo.setCurrentIndex(vm.family_index())
        self._fill(self._loader_combo, _LOADER_PLACEHOLDER,
                   vm.loader_versions, vm.selection.loader_version)
        self._loader_combo.setEnabled(bool(vm.loader_versions) and not vm.busy)
        self._platform_combo.setEnabled(not vm.busy)
        self._family_combo.setEnabled(not vm.busy)
        self._submit_btn.setEnabled(vm.can_submit)
        self._footer.setText(vm.footer_text)

    # ── Internal helpers ───────────────────────────────────────────────────

    @staticmethod
    def _fill(combo: QComboBox, placeholder: str,
              values: list[str], current: str) -> None:
        combo.blockSignals(True)
        combo.clear()
        combo.addItem(placeholder, "")
        for value in values:
            combo.addItem(value, value)
        # A restored value may not be listed (yet); show it anyway.
        if current and current not in values:
            combo.addItem(current, current)
        combo.setCurrentIndex(max(0, combo.findData(current)))
        combo.blockSignals(False)
