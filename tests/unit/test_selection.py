"""
Unit tests for src/engine/selection.py — pure selection logic, no I/O.

Coverage plan
─────────────
derive_loader_versions  → 5 tests
SelectionStateMachine   → 12 tests (transitions, invariant, restore)
"""

import itertools

import pytest


def _catalogs(forge=None, fabric=(), platforms=()):
    from src.engine.selection import Catalogs
    return Catalogs(platform_versions=tuple(platforms), forge=dict(forge or {}),
                    fabric=tuple(fabric))


def _assert_no_stale_loader(machine):
    state = machine.state
    assert state.loader_version == "" or state.loader_version in machine.available_loader_versions


# ─────────────────────────────────────────────────────────────────────────────
# 1. derive_loader_versions
# ─────────────────────────────────────────────────────────────────────────────

class TestDeriveLoaderVersions:

    def test_forge_with_entry_offers_single_version(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import derive_loader_versions
        result = derive_loader_versions(_catalogs(forge={"1.20": "47.2.0"}), "1.20",
                                        LoaderFamily.FORGE)
        assert result == (["47.2.0"], "47.2.0")

    def test_forge_without_entry_offers_nothing(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import derive_loader_versions
        result = derive_loader_versions(_catalogs(forge={"1.20": "47.2.0"}), "1.21",
                                        LoaderFamily.FORGE)
        assert result == ([], "")

    def test_fabric_offers_full_list_first_selected(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import derive_loader_versions
        for platform in ("1.20", "1.16.5", "anything"):
            result = derive_loader_versions(_catalogs(fabric=["1.0", "2.0"]), platform,
                                            LoaderFamily.FABRIC)
            assert result == (["1.0", "2.0"], "1.0")

    def test_fabric_empty_list_selects_nothing(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import derive_loader_versions
        assert derive_loader_versions(_catalogs(), "1.20", LoaderFamily.FABRIC) == ([], "")

    def test_empty_platform_with_forge_offers_nothing(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import derive_loader_versions
        result = derive_loader_versions(_catalogs(forge={"1.20": "47.2.0"}), "",
                                        LoaderFamily.FORGE)
        assert result == ([], "")


# ─────────────────────────────────────────────────────────────────────────────
# 2. SelectionStateMachine
# ─────────────────────────────────────────────────────────────────────────────

class TestSelectionStateMachine:

    def _machine(self):
        from src.engine.selection import SelectionStateMachine
        return SelectionStateMachine()

    def test_initial_state_is_empty_forge(self):
        from src.catalog.models import LoaderFamily
        m = self._machine()
        assert m.state.platform_version == ""
        assert m.state.loader_family is LoaderFamily.FORGE
        assert m.state.loader_version == ""
        assert m.available_loader_versions == []

    def test_forge_platform_change_to_missing_version_clears_loader(self):
        m = self._machine()
        m.set_forge_catalog({"1.20-latest": "47.2.0"})
        m.select_platform_version("1.20")
        assert m.available_loader_versions == ["47.2.0"]
        assert m.state.loader_version == "47.2.0"
        m.select_platform_version("1.21")
        assert m.available_loader_versions == []
        assert m.state.loader_version == ""

    def test_fabric_selects_first_for_any_platform(self):
        m = self._machine()
        m.set_fabric_catalog(["1.0", "2.0"])
        m.select_loader_family("fabric")
        for platform in ("1.20", "1.19.4"):
            m.select_platform_version(platform)
            assert m.available_loader_versions == ["1.0", "2.0"]
            assert m.state.loader_version == "1.0"

    def test_platform_change_recomputes_even_if_old_value_still_offered(self):
        m = self._machine()
        m.set_fabric_catalog(["1.0", "2.0"])
        m.select_loader_family("fabric")
        m.select_platform_version("1.20")
        m.select_loader_version("2.0")
        m.select_platform_version("1.19.4")
        assert m.state.loader_version == "1.0"

    def test_family_switch_rederives(self):
        m = self._machine()
        m.set_forge_catalog({"1.20-latest": "47.2.0"})
        m.set_fabric_catalog(["1.0"])
        m.select_platform_version("1.20")
        m.select_loader_family("fabric")
        assert m.state.loader_version == "1.0"
        m.select_loader_family("forge")
        assert m.state.loader_version == "47.2.0"

    def test_catalog_update_rederives(self):
        m = self._machine()
        m.select_platform_version("1.20")
        assert m.state.loader_version == ""
        m.set_forge_catalog({"1.20-recommended": "46.0.14"})
        assert m.state.loader_version == "46.0.14"

    def test_malformed_catalogs_become_empty(self):
        m = self._machine()
        m.set_platform_versions({"not": "a list"})
        m.set_forge_catalog(["not", "a", "map"])
        m.set_fabric_catalog(None)
        assert m.catalogs.platform_versions == ()
        assert m.catalogs.forge == {}
        assert m.catalogs.fabric == ()

    def test_select_loader_version_rejects_unlisted(self):
        from src.exceptions import SelectionError
        m = self._machine()
        m.set_fabric_catalog(["1.0", "2.0"])
        m.select_loader_family("fabric")
        with pytest.raises(SelectionError):
            m.select_loader_version("9.9")
        assert m.state.loader_version == "1.0"

    def test_select_loader_version_empty_clears(self):
        m = self._machine()
        m.set_fabric_catalog(["1.0"])
        m.select_loader_family("fabric")
        m.select_loader_version("")
        assert m.state.loader_version == ""

    def test_invariant_holds_across_every_event_order(self):
        events = [
            lambda m: m.set_forge_catalog({"1.20-latest": "47.2.0", "1.19-latest": "45.1.0"}),
            lambda m: m.set_fabric_catalog(["1.0", "2.0"]),
            lambda m: m.set_platform_versions(["1.20", "1.19"]),
            lambda m: m.select_platform_version("1.20"),
            lambda m: m.select_loader_family("fabric"),
            lambda m: m.select_platform_version("1.21"),
            lambda m: m.set_fabric_catalog([]),
        ]
        for order in itertools.permutations(events):
            m = self._machine()
            for event in order:
                event(m)
                _assert_no_stale_loader(m)

    def test_restore_seeds_platform_and_family_then_rederives(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import SelectionState, derive_loader_versions
        m = self._machine()
        m.set_fabric_catalog(["1.0", "2.0"])
        m.restore(SelectionState("1.20", LoaderFamily.FABRIC, "2.0"))
        assert m.state.platform_version == "1.20"
        assert m.state.loader_family is LoaderFamily.FABRIC
        assert m.state.loader_version == derive_loader_versions(
            m.catalogs, "1.20", LoaderFamily.FABRIC
        )[1] == "1.0"

    def test_catalog_load_after_restore_selects_derived_default(self):
        from src.catalog.models import LoaderFamily
        from src.engine.selection import SelectionState
        m = self._machine()
        m.restore(SelectionState("1.20", LoaderFamily.FABRIC, "2.0"))
        assert m.state.loader_version == ""
        m.set_fabric_catalog(["1.0", "2.0"])
        assert m.state.loader_version == "1.0"
        _assert_no_stale_loader(m)

    def test_view_is_immutable_snapshot(self):
        m = self._machine()
        m.set_platform_versions(["1.20"])
        m.set_fabric_catalog(["1.0"])
        m.select_loader_family("fabric")
        view = m.view
        m.set_fabric_catalog(["2.0"])
        assert view.available_loader_versions == ("1.0",)
        assert view.platform_versions == ("1.20",)
