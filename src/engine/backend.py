"""Abstract collaborator boundary consumed by InstallerEngine."""

from abc import ABC, abstractmethod
from typing import Any, Callable

from src.catalog.models import LoaderFamily
from .selection import SelectionState

__all__ = ["AbstractBackend", "LogHandler", "Unsubscribe"]

LogHandler  = Callable[[str], None]
Unsubscribe = Callable[[], None]


class AbstractBackend(ABC):
    """
    Everything the engine needs from the outside world.

    Implementations may return malformed data from the catalog getters; the
    engine coerces it.  Any method may raise; the engine downgrades every
    failure to a log line or an empty value.
    """

    @abstractmethod
    async def get_app_version(self) -> str:
        ...

    @abstractmethod
    async def get_platform_versions(self) -> Any:
        """Sequence of platform (Minecraft) versions."""
        ...

    @abstractmethod
    async def get_forge_catalog(self) -> Any:
        """Raw, pre-normalization Forge promotions mapping."""
        ...

    @abstractmethod
    async def get_fabric_catalog(self) -> Any:
        """Ordered Fabric loader versions, preferred first."""
        ...

    @abstractmethod
    async def get_saved_selection(self) -> Any:
        """The last persisted SelectionState (or a mapping), or None."""
        ...

    @abstractmethod
    async def save_selection(self, state: SelectionState) -> None:
        ...

    @abstractmethod
    async def submit_installation(
        self,
        platform_version: str,
        loader_family: LoaderFamily,
        loader_version: str,
    ) -> None:
        """Run the installation job; resolves on success, raises on failure."""
        ...

    @abstractmethod
    def on_log_event(self, handler: LogHandler) -> Unsubscribe:
        """Subscribe *handler* to ordered log events; return the unsubscribe callable."""
        ...
