"""
engine — version-resolution and selection-state core.

Public API
──────────
SelectionState / Catalogs / SelectionView — selection data model
derive_loader_versions                    — pure re-derivation rule
SelectionStateMachine                     — owns catalogs + selection
SessionBridge                             — restore / persist last selection
JobOrchestrator / SubmitStatus            — one-at-a-time installation job
LogStream                                 — append-only ordered log
InstallerEngine / EngineListener          — owner object + observer hooks
AbstractBackend                           — collaborator boundary
"""

from .backend import AbstractBackend
from .engine import EngineListener, InstallerEngine
from .logstream import LogStream
from .orchestrator import JobOrchestrator, SubmitStatus, validate_selection
from .selection import (
    Catalogs,
    SelectionState,
    SelectionStateMachine,
    SelectionView,
    derive_loader_versions,
)
from .session import SessionBridge, coerce_saved_selection

__all__ = [
    "AbstractBackend",
    "EngineListener",
    "InstallerEngine",
    "LogStream",
    "JobOrchestrator",
    "SubmitStatus",
    "validate_selection",
    "Catalogs",
    "SelectionState",
    "SelectionStateMachine",
    "SelectionView",
    "derive_loader_versions",
    "SessionBridge",
    "coerce_saved_selection",
]
