"""
Shared fixtures for the unit tests.

FakeBackend is an in-memory AbstractBackend: every getter returns (or raises)
what the test configured, and every call is recorded.
"""

import asyncio

import pytest

from src.engine.backend import AbstractBackend


class FakeBackend(AbstractBackend):
    """Configurable stand-in for LocalBackend."""

    def __init__(self):
        self.app_version = "1.2.3"
        self.platform_versions = ["1.20.1", "1.20", "1.19.4"]
        self.forge_catalog = {
            "1.20.1-latest": "47.2.20",
            "1.20.1-recommended": "47.2.0",
            "1.20-recommended": "46.0.14",
        }
        self.fabric_catalog = ["1.0.1", "1.0.0", "0.11.2"]
        self.saved = None
        self.errors: dict[str, Exception] = {}
        self.saved_states = []
        self.submissions = []
        self.install_error = None
        self.install_gate = None          # asyncio.Event the job waits on
        self.handlers = []
        self.unsubscribed = 0

    async def _value(self, name, value):
        await asyncio.sleep(0)
        if name in self.errors:
            raise self.errors[name]
        return value

    async def get_app_version(self):
        return await self._value("app_version", self.app_version)

    async def get_platform_versions(self):
        return await self._value("platform_versions", self.platform_versions)

    async def get_forge_catalog(self):
        return await self._value("forge", self.forge_catalog)

    async def get_fabric_catalog(self):
        return await self._value("fabric", self.fabric_catalog)

    async def get_saved_selection(self):
        return await self._value("saved", self.saved)

    async def save_selection(self, state):
        await self._value("save", None)
        self.saved_states.append(state)

    async def submit_installation(self, platform_version, loader_family, loader_version):
        self.submissions.append((platform_version, loader_family, loader_version))
        self.emit(f"installing {loader_family.value} {loader_version}")
        if self.install_gate is not None:
            await self.install_gate.wait()
        if self.install_error is not None:
            raise self.install_error

    def on_log_event(self, handler):
        self.handlers.append(handler)

        def unsubscribe():
            self.unsubscribed += 1
            if handler in self.handlers:
                self.handlers.remove(handler)

        return unsubscribe

    def emit(self, message):
        for handler in list(self.handlers):
            handler(message)


@pytest.fixture
def backend():
    """Fresh FakeBackend with a small realistic catalog."""
    return FakeBackend()


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run
