"""
gui — PyQt6 front-end for the mod loader installer.

Modules
───────
main_window           — MainWindow, the top-level application window
worker                — EngineWorker / EngineThread (asyncio loop host)
viewmodels            — pure-Python state containers (importable without Qt)
pages.installer       — the installer page

Qt modules are not imported here so that viewmodels stay Qt-free.
"""

from src.gui import viewmodels

__all__ = ["viewmodels"]
