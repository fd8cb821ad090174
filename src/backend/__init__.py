"""
backend — in-process collaborators behind the engine boundary.

Public API
──────────
LogEventBus       — ordered pub/sub for installer log lines
InstallRequest    — resolved triple + derived installer details
JavaInstallerJob  — downloads and runs a loader installer
LocalBackend      — AbstractBackend implementation wiring the above
"""

from .events import LogEventBus
from .installer import FABRIC_LOADER_VERSION, InstallRequest, JavaInstallerJob
from .local import LocalBackend

__all__ = [
    "LogEventBus",
    "FABRIC_LOADER_VERSION",
    "InstallRequest",
    "JavaInstallerJob",
    "LocalBackend",
]
