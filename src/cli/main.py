"""
CLI entry point for mod-loader-installer.

Usage
─────
  # Open the installer window (default when no subcommand is given)
  python -m src gui

  # List Minecraft versions, or the loader versions offered for one
  python -m src versions
  python -m src versions --loader forge --mc 1.20.1

  # Headless install; the loader version defaults to the auto-selected one
  python -m src install --mc 1.20.1 --loader fabric --version 1.0.1

  # Show the last submitted selection
  python -m src last

Subcommands are implemented as standalone functions (cmd_versions,
cmd_install, cmd_last, cmd_gui) so they can be unit-tested without invoking
argparse.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from src.catalog.models import LoaderFamily
from src.config import AppConfig
from src.engine.backend import AbstractBackend
from src.engine.engine import EngineListener, InstallerEngine
from src.engine.orchestrator import SubmitStatus
from src.exceptions import InstallerBaseError
from src.store.db import SelectionStore

__all__ = ["build_parser", "cmd_versions", "cmd_install", "cmd_last", "cmd_gui", "main"]

logger = logging.getLogger(__name__)

_LOADER_CHOICES = [f.value for f in LoaderFamily]


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: gui | versions | install | last
    """
    parser = argparse.ArgumentParser(
        prog="mod-loader-installer",
        description="Install Forge or Fabric for a Minecraft version",
    )
    parser.add_argument(
        "--db",
        default=None,
        metavar="PATH",
        help="SQLite database for the saved selection "
             "(default: ~/.mod-loader-installer/selection.db or $MLI_DB_PATH)",
    )
    parser.add_argument(
        "--minecraft-dir",
        default=None,
        dest="minecraft_dir",
        metavar="DIR",
        help="Minecraft data directory (default: the launcher's, or $MLI_MINECRAFT_DIR)",
    )
    parser.add_argument(
        "--java",
        default=None,
        metavar="CMD",
        help="Java executable used to run installers (default: java, or $MLI_JAVA)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── gui ───────────────────────────────────────────────────────────────
    sub.add_parser("gui", help="Open the installer window")

    # ── versions ──────────────────────────────────────────────────────────
    ver = sub.add_parser("versions", help="List Minecraft or loader versions")
    ver.add_argument(
        "--loader",
        choices=_LOADER_CHOICES,
        default=None,
        help="List loader versions for this loader instead of Minecraft versions",
    )
    ver.add_argument(
        "--mc",
        default="",
        metavar="VERSION",
        help="Minecraft version whose loader versions are listed",
    )

    # ── install ───────────────────────────────────────────────────────────
    ins = sub.add_parser("install", help="Install a mod loader without the GUI")
    ins.add_argument(
        "--mc",
        required=True,
        metavar="VERSION",
        help="Minecraft version, e.g. 1.20.1",
    )
    ins.add_argument(
        "--loader",
        required=True,
        choices=_LOADER_CHOICES,
        help="Mod loader family",
    )
    ins.add_argument(
        "--version",
        default=None,
        metavar="VERSION",
        help="Loader version (default: the auto-selected one)",
    )

    # ── last ──────────────────────────────────────────────────────────────
    sub.add_parser("last", help="Show the last submitted selection")

    return parser


# ── Helpers ───────────────────────────────────────────────────────────────────


class _PrintListener(EngineListener):
    """Echo engine log lines to stdout and notices to stderr."""

    def log_appended(self, message: str) -> None:
        print(message)

    def notice(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)


def _config_from_args(ns: argparse.Namespace) -> AppConfig:
    cfg = AppConfig.from_env()
    overrides = {}
    if ns.db:
        overrides["db_path"] = ns.db
    if ns.minecraft_dir:
        overrides["minecraft_dir"] = Path(ns.minecraft_dir).expanduser()
    if ns.java:
        overrides["java_cmd"] = ns.java
    return dataclasses.replace(cfg, **overrides)


def _make_backend(config: AppConfig) -> AbstractBackend:
    from src.backend.local import LocalBackend
    return LocalBackend(config)


# ── Command implementations ───────────────────────────────────────────────────


def cmd_versions(
    backend: AbstractBackend,
    loader: Optional[str] = None,
    mc: str = "",
) -> list[str]:
    """
    Print Minecraft versions, or with *loader* the loader versions offered
    for Minecraft version *mc*.  Returns the printed list.
    """
    async def _run() -> list[str]:
        engine = InstallerEngine(backend)
        await engine.start()
        try:
            if loader is None:
                return list(engine.view.platform_versions)
            engine.select_loader_family(loader)
            engine.select_platform_version(mc)
            return list(engine.view.available_loader_versions)
        finally:
            engine.close()

    versions = asyncio.run(_run())
    if not versions:
        print("0 versions found.")
    for version in versions:
        print(version)
    return versions


def cmd_install(
    backend: AbstractBackend,
    mc: str,
    loader: str,
    version: Optional[str] = None,
) -> SubmitStatus:
    """
    Headless install: start the engine, select (mc, loader[, version]),
    submit, and stream every log entry to stdout.

    Raises:
        SelectionError: *loader* or *version* is not offered.
    """
    async def _run() -> SubmitStatus:
        engine = InstallerEngine(backend, listener=_PrintListener())
        await engine.start()
        try:
            engine.select_loader_family(loader)
            engine.select_platform_version(mc)
            if version:
                engine.select_loader_version(version)
            status = await engine.submit()
            await engine.drain()
            return status
        finally:
            engine.close()

    status = asyncio.run(_run())
    logger.info("Installation finished with status %s", status.value)
    return status


def cmd_last(store: SelectionStore) -> None:
    """Print the saved selection to stdout."""
    saved = store.load()
    if saved is None:
        print("No saved selection.")
        return
    print(saved)


def cmd_gui(config: AppConfig) -> int:
    """Run the Qt application until the window is closed."""
    from PyQt6.QtWidgets import QApplication
    from src.gui.main_window import MainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(config=config)
    window.show()
    window.start()
    return app.exec()


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    config = _config_from_args(ns)

    try:
        if ns.subcommand in (None, "gui"):
            return cmd_gui(config)

        if ns.subcommand == "last":
            cmd_last(SelectionStore(config.db_path))
            return 0

        backend = _make_backend(config)

        if ns.subcommand == "versions":
            cmd_versions(backend, loader=ns.loader, mc=ns.mc)
            return 0

        if ns.subcommand == "install":
            status = cmd_install(backend, mc=ns.mc, loader=ns.loader, version=ns.version)
            return 0 if status is SubmitStatus.COMPLETED else 1
    except InstallerBaseError as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
