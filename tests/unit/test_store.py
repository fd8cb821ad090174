"""
Unit tests for src/store/

Coverage plan
─────────────
models.py   → 2 tests  (SavedSelection defaults, str)
db.py       → 7 tests  (schema auto-create, save/load, overwrite, clear,
                        unknown loader row, sqlite failure → StoreError)
"""

import sqlite3
from datetime import datetime

import pytest


def _state(platform="1.20.1", family="forge", loader="47.2.20"):
    from src.catalog.models import LoaderFamily
    from src.engine.selection import SelectionState
    return SelectionState(platform, LoaderFamily.parse(family), loader)


# ─────────────────────────────────────────────────────────────────────────────
# 1. SavedSelection model
# ─────────────────────────────────────────────────────────────────────────────

class TestSavedSelection:

    def test_saved_at_defaults_to_now_utc(self):
        from src.store.models import SavedSelection
        rec = SavedSelection(state=_state())
        assert isinstance(rec.saved_at, datetime)
        assert rec.saved_at.tzinfo is not None

    def test_str_mentions_versions(self):
        from src.store.models import SavedSelection
        text = str(SavedSelection(state=_state()))
        assert "1.20.1" in text
        assert "Forge" in text
        assert "47.2.20" in text


# ─────────────────────────────────────────────────────────────────────────────
# 2. SelectionStore
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def store(tmp_path):
    """Return a fresh SelectionStore backed by a temporary SQLite file."""
    from src.store.db import SelectionStore
    return SelectionStore(db_path=str(tmp_path / "test.db"))


class TestSelectionStore:

    def test_schema_auto_created_in_nested_dir(self, tmp_path):
        from src.store.db import SelectionStore
        s = SelectionStore(db_path=str(tmp_path / "nested" / "dir" / "fresh.db"))
        assert s.path.exists()
        assert s.load() is None

    def test_save_then_load_round_trips_state(self, store):
        store.save(_state("1.20", "fabric", "1.0.0"))
        loaded = store.load()
        assert loaded is not None
        assert loaded.state == _state("1.20", "fabric", "1.0.0")
        assert loaded.saved_at is not None

    def test_second_save_replaces_first(self, store):
        store.save(_state("1.20"))
        store.save(_state("1.19.4", "fabric", "0.11.2"))
        assert store.load().state == _state("1.19.4", "fabric", "0.11.2")
        with sqlite3.connect(str(store.path)) as conn:
            assert conn.execute("SELECT COUNT(*) FROM last_selection").fetchone()[0] == 1

    def test_clear_removes_selection(self, store):
        store.save(_state())
        assert store.clear() is True
        assert store.load() is None
        assert store.clear() is False

    def test_unknown_loader_row_loads_as_none(self, store):
        with sqlite3.connect(str(store.path)) as conn:
            conn.execute(
                "INSERT INTO last_selection VALUES (1, '1.20', 'quilt', '0.1', '2024-01-01T00:00:00Z')"
            )
            conn.commit()
        assert store.load() is None

    def test_survives_reopen(self, tmp_path):
        from src.store.db import SelectionStore
        path = str(tmp_path / "persist.db")
        SelectionStore(path).save(_state())
        assert SelectionStore(path).load().state == _state()

    def test_unopenable_path_raises_store_error(self, tmp_path):
        from src.exceptions import StoreError
        from src.store.db import SelectionStore
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(StoreError):
            SelectionStore(db_path=str(blocker / "sub" / "db.sqlite"))
