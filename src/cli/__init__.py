"""
cli — command-line interface for mod-loader-installer.

Entry points
────────────
  python -m src              (via src/__main__.py)
  mod-loader-installer       (via pyproject.toml [project.scripts])

Subcommands: gui | versions | install | last
"""

from src.cli.main import build_parser, cmd_install, cmd_last, cmd_versions, main

__all__ = ["build_parser", "cmd_install", "cmd_last", "cmd_versions", "main"]
