"""
store — SQLite-backed persistence for the last submitted selection.

Public API
──────────
SavedSelection  — dataclass wrapping a SelectionState + save timestamp
SelectionStore  — save / load / clear
"""

from src.store.models import SavedSelection
from src.store.db import SelectionStore

__all__ = ["SavedSelection", "SelectionStore"]
