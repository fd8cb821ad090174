"""Data models for the store module."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from src.engine.selection import SelectionState

__all__ = ["SavedSelection"]


@dataclass
class SavedSelection:
    """
    Persisted copy of the last submitted selection.

    Fields
    ──────
    state     — the SelectionState as it was submitted
    saved_at  — UTC timestamp of the save
    """
    state:    SelectionState
    saved_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.saved_at is None:
            self.saved_at = datetime.now(tz=timezone.utc)

    def __str__(self) -> str:
        stamp = self.saved_at.strftime("%Y-%m-%d %H:%M UTC") if self.saved_at else "?"
        return f"{self.state}  (saved {stamp})"
