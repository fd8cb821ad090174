"""
Unit tests for src/cli/

Coverage plan
─────────────
arg parsing      → 5 tests  (versions / install / last, global flags)
versions command → 3 tests
install command  → 4 tests
last command     → 2 tests
main()           → 3 tests
"""

import importlib

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse(args: list[str]):
    """Call the CLI argument parser and return the parsed namespace."""
    from src.cli.main import build_parser
    parser = build_parser()
    return parser.parse_args(args)


@pytest.fixture
def store(tmp_path):
    """Fresh SelectionStore for CLI command tests."""
    from src.store.db import SelectionStore
    return SelectionStore(db_path=str(tmp_path / "cli_test.db"))


# ─────────────────────────────────────────────────────────────────────────────
# 1. Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestArgParsing:

    def test_install_parses_triple(self):
        ns = _parse(["install", "--mc", "1.20.1", "--loader", "fabric", "--version", "1.0.1"])
        assert ns.subcommand == "install"
        assert (ns.mc, ns.loader, ns.version) == ("1.20.1", "fabric", "1.0.1")

    def test_install_version_defaults_to_none(self):
        ns = _parse(["install", "--mc", "1.20.1", "--loader", "forge"])
        assert ns.version is None

    def test_install_rejects_unknown_loader(self):
        with pytest.raises(SystemExit):
            _parse(["install", "--mc", "1.20.1", "--loader", "quilt"])

    def test_versions_defaults(self):
        ns = _parse(["versions"])
        assert ns.subcommand == "versions"
        assert ns.loader is None
        assert ns.mc == ""

    def test_global_flags(self):
        ns = _parse(["--db", "/tmp/x.db", "--minecraft-dir", "/tmp/mc", "--debug", "last"])
        assert ns.db == "/tmp/x.db"
        assert ns.minecraft_dir == "/tmp/mc"
        assert ns.debug is True
        assert ns.subcommand == "last"


# ─────────────────────────────────────────────────────────────────────────────
# 2. versions command
# ─────────────────────────────────────────────────────────────────────────────

class TestVersionsCommand:

    def test_lists_platform_versions(self, backend, capsys):
        from src.cli.main import cmd_versions
        assert cmd_versions(backend) == ["1.20.1", "1.20", "1.19.4"]
        assert "1.19.4" in capsys.readouterr().out

    def test_lists_forge_version_for_platform(self, backend):
        from src.cli.main import cmd_versions
        assert cmd_versions(backend, loader="forge", mc="1.20.1") == ["47.2.20"]

    def test_no_versions_prints_zero(self, backend, capsys):
        from src.cli.main import cmd_versions
        from src.exceptions import CatalogFetchError
        backend.errors["platform_versions"] = CatalogFetchError("offline")
        assert cmd_versions(backend) == []
        assert "0 versions" in capsys.readouterr().out


# ─────────────────────────────────────────────────────────────────────────────
# 3. install command
# ─────────────────────────────────────────────────────────────────────────────

class TestInstallCommand:

    def test_auto_selected_version_installed(self, backend, capsys):
        from src.cli.main import cmd_install
        from src.engine.orchestrator import SubmitStatus
        status = cmd_install(backend, mc="1.20.1", loader="fabric")
        assert status is SubmitStatus.COMPLETED
        assert backend.submissions[0][2] == "1.0.1"
        assert "installing fabric 1.0.1" in capsys.readouterr().out

    def test_explicit_version_installed(self, backend):
        from src.cli.main import cmd_install
        cmd_install(backend, mc="1.20.1", loader="fabric", version="0.11.2")
        assert backend.submissions[0][2] == "0.11.2"
        assert backend.saved_states[0].loader_version == "0.11.2"

    def test_unlisted_version_raises_selection_error(self, backend):
        from src.cli.main import cmd_install
        from src.exceptions import SelectionError
        with pytest.raises(SelectionError):
            cmd_install(backend, mc="1.20.1", loader="fabric", version="9.9.9")
        assert backend.submissions == []

    def test_missing_forge_build_is_invalid(self, backend, capsys):
        from src.cli.main import cmd_install
        from src.engine.orchestrator import SubmitStatus
        status = cmd_install(backend, mc="1.12.2", loader="forge")
        assert status is SubmitStatus.INVALID
        assert "mod loader version" in capsys.readouterr().err


# ─────────────────────────────────────────────────────────────────────────────
# 4. last command
# ─────────────────────────────────────────────────────────────────────────────

class TestLastCommand:

    def test_empty_store(self, store, capsys):
        from src.cli.main import cmd_last
        cmd_last(store)
        assert "No saved selection" in capsys.readouterr().out

    def test_prints_saved_selection(self, store, capsys):
        from src.catalog.models import LoaderFamily
        from src.cli.main import cmd_last
        from src.engine.selection import SelectionState
        store.save(SelectionState("1.20", LoaderFamily.FORGE, "46.0.14"))
        cmd_last(store)
        out = capsys.readouterr().out
        assert "1.20" in out and "46.0.14" in out


# ─────────────────────────────────────────────────────────────────────────────
# 5. main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_last_subcommand_returns_zero(self, tmp_path, capsys):
        from src.cli.main import main
        assert main(["--db", str(tmp_path / "m.db"), "last"]) == 0
        assert "No saved selection" in capsys.readouterr().out

    def test_install_failure_returns_one(self, tmp_path, backend, monkeypatch):
        cli_main = importlib.import_module("src.cli.main")
        from src.exceptions import InstallError
        backend.install_error = InstallError("installer exited with code 1")
        monkeypatch.setattr(cli_main, "_make_backend", lambda config: backend)
        code = cli_main.main(["--db", str(tmp_path / "m.db"),
                              "install", "--mc", "1.20.1", "--loader", "forge"])
        assert code == 1

    def test_install_success_returns_zero(self, tmp_path, backend, monkeypatch):
        cli_main = importlib.import_module("src.cli.main")
        monkeypatch.setattr(cli_main, "_make_backend", lambda config: backend)
        code = cli_main.main(["--db", str(tmp_path / "m.db"),
                              "install", "--mc", "1.20.1", "--loader", "fabric"])
        assert code == 0
        assert backend.submissions[0][2] == "1.0.1"
