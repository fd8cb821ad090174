"""
GUI ViewModels — pure-Python state containers.

No Qt imports here; every class is testable without a display.
Qt widgets feed these objects from EngineWorker signals and render from
them.  (Signal emission is handled by the Qt layer, not here.)

Public API
──────────
InstallerViewModel  — mirrors the engine's selection view, busy flag and version
LogViewModel        — append-only log shown in the log panel
"""

import logging
from typing import Optional

from src.catalog.models import LoaderFamily
from src.engine.selection import SelectionState, SelectionView

__all__ = ["InstallerViewModel", "LogViewModel"]

logger = logging.getLogger(__name__)


# ── InstallerViewModel ─────────────────────────────────────────────────────────

class InstallerViewModel:
    """
    Mirror of the engine state the form renders.

    Attributes
    ──────────
    platform_versions  — options of the first dropdown
    loader_families    — options of the second dropdown (fixed)
    loader_versions    — options of the third dropdown
    selection          — current SelectionState
    busy               — True while an installation is in flight
    app_version        — shown in the footer
    can_submit         — derived: both versions chosen and not busy
    """

    def __init__(self) -> None:
        self.platform_versions: list[str]          = []
        self.loader_families:   list[LoaderFamily] = list(LoaderFamily)
        self.loader_versions:   list[str]          = []
        self.selection:         SelectionState     = SelectionState()
        self.busy:              bool               = False
        self.app_version:       str                = ""

    def apply_view(self, view: SelectionView) -> None:
        """Replace options and selection from an engine snapshot."""
        self.platform_versions = list(view.platform_versions)
        self.loader_versions   = list(view.available_loader_versions)
        self.selection         = view.state

    @property
    def can_submit(self) -> bool:
        return (
            bool(self.selection.platform_version)
            and bool(self.selection.loader_version)
            and not self.busy
        )

    @property
    def footer_text(self) -> str:
        return f"Version v{self.app_version}" if self.app_version else ""

    def family_index(self, family: Optional[LoaderFamily] = None) -> int:
        family = family or self.selection.loader_family
        return self.loader_families.index(family)


# ── LogViewModel ───────────────────────────────────────────────────────────────

class LogViewModel:
    """
    Append-only log lines for the log panel.

    Attributes
    ──────────
    log_lines — list of messages (newest last); never reordered or trimmed
    """

    def __init__(self) -> None:
        self.log_lines: list[str] = []

    def append_log(self, message: str) -> None:
        """Append *message* to the log."""
        self.log_lines.append(message)
