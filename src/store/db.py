"""
SelectionStore — SQLite-backed persistence for the last submitted selection.

Usage::

    store = SelectionStore(db_path="~/.mod-loader-installer/selection.db")

    store.save(SelectionState("1.20.1", LoaderFamily.FORGE, "47.2.0"))
    saved = store.load()          # SavedSelection or None
    store.clear()
"""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from src.catalog.models import LoaderFamily
from src.engine.selection import SelectionState
from src.exceptions import SelectionError, StoreError
from src.store.models import SavedSelection

__all__ = ["SelectionStore"]

logger = logging.getLogger(__name__)

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).parent / "migrations" / "schema.sql"

_TS_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class SelectionStore:
    """
    Single-slot store for the user's last selection.

    The database file and schema are created automatically on first open.
    All operations use context-managed connections; no persistent connection
    is kept open between calls.  sqlite3 errors surface as StoreError.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path).expanduser()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Cannot open selection store {self._db_path}: {exc}") from exc

    @property
    def path(self) -> Path:
        return self._db_path

    # ── Internal helpers ──────────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        """Create tables if they don't already exist."""
        sql = _SCHEMA_PATH.read_text(encoding="utf-8")
        with self._connect() as conn:
            conn.executescript(sql)

    @staticmethod
    def _row_to_saved(row: sqlite3.Row) -> Optional[SavedSelection]:
        try:
            family = LoaderFamily.parse(row["loader_family"])
        except SelectionError:
            logger.warning("Stored selection has unknown loader %r", row["loader_family"])
            return None
        try:
            saved_at = datetime.fromisoformat(row["saved_at"].replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            saved_at = None
        return SavedSelection(
            state=SelectionState(
                platform_version=row["platform_version"],
                loader_family=family,
                loader_version=row["loader_version"],
            ),
            saved_at=saved_at,
        )

    # ── Public API ────────────────────────────────────────────────────────

    def save(self, state: SelectionState) -> SavedSelection:
        """Replace the stored selection with *state* and return the saved record."""
        record = SavedSelection(state=state)
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO last_selection
                        (slot, platform_version, loader_family, loader_version, saved_at)
                    VALUES (1, ?, ?, ?, ?)
                    """,
                    (
                        state.platform_version,
                        state.loader_family.value,
                        state.loader_version,
                        record.saved_at.strftime(_TS_FORMAT),
                    ),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Saving selection failed: {exc}") from exc
        logger.debug("Selection saved to %s", self._db_path)
        return record

    def load(self) -> Optional[SavedSelection]:
        """Return the stored selection, or None if nothing was saved yet."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT * FROM last_selection WHERE slot = 1"
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Loading selection failed: {exc}") from exc
        return self._row_to_saved(row) if row else None

    def clear(self) -> bool:
        """
        Forget the stored selection.

        Returns:
            True if a row was deleted, False if nothing was stored.
        """
        try:
            with self._connect() as conn:
                cur = conn.execute("DELETE FROM last_selection")
                conn.commit()
                return cur.rowcount > 0
        except sqlite3.Error as exc:
            raise StoreError(f"Clearing selection failed: {exc}") from exc
