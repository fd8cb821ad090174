"""
Selection state machine — platform version → loader family → loader version.

Every change to one of the inputs (platform version, loader family, any
catalog, a restored selection) re-derives the loader-version options and the
auto-selected loader version through derive_loader_versions(), a pure
function of (catalogs, platform_version, loader_family).  There is no
"keep the old value if it is still valid" shortcut.

Invariant held after every transition:
    state.loader_version == "" or state.loader_version in available_loader_versions
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from src.catalog.models import LoaderFamily
from src.catalog.normalizer import coerce_version_list, normalize_forge_catalog
from src.exceptions import SelectionError

__all__ = [
    "SelectionState",
    "Catalogs",
    "SelectionView",
    "derive_loader_versions",
    "SelectionStateMachine",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    """The user's choice; empty strings mean "nothing selected"."""
    platform_version: str          = ""
    loader_family:    LoaderFamily = LoaderFamily.FORGE
    loader_version:   str          = ""

    def __str__(self) -> str:
        return (
            f"{self.platform_version or '-'} / {self.loader_family.label} "
            f"{self.loader_version or '-'}"
        )


@dataclass(frozen=True)
class Catalogs:
    """Normalized catalogs; ``forge`` is already collapsed to one version per key."""
    platform_versions: tuple[str, ...] = ()
    forge:             dict            = field(default_factory=dict)
    fabric:            tuple[str, ...] = ()


@dataclass(frozen=True)
class SelectionView:
    """Immutable snapshot handed to observers (GUI, CLI)."""
    state:                     SelectionState
    available_loader_versions: tuple[str, ...]
    platform_versions:         tuple[str, ...]


def derive_loader_versions(
    catalogs: Catalogs,
    platform_version: str,
    loader_family: LoaderFamily,
) -> tuple[list[str], str]:
    """
    Return (available_loader_versions, auto_selected_loader_version).

    Forge offers exactly the resolved version for the platform version, Fabric
    offers its whole list (whatever the platform version) with the first entry
    selected, anything else offers nothing.
    """
    if loader_family is LoaderFamily.FORGE and platform_version in catalogs.forge:
        version = catalogs.forge[platform_version]
        return [version], version
    if loader_family is LoaderFamily.FABRIC:
        versions = list(catalogs.fabric)
        return versions, versions[0] if versions else ""
    return [], ""


class SelectionStateMachine:
    """
    Owns the catalogs and the current SelectionState.

    Attributes
    ──────────
    catalogs                   — current normalized Catalogs
    state                      — current SelectionState
    available_loader_versions  — derived list for (platform_version, loader_family)
    """

    def __init__(self) -> None:
        self.catalogs:                  Catalogs       = Catalogs()
        self.state:                     SelectionState = SelectionState()
        self.available_loader_versions: list[str]      = []

    # ── Derived ────────────────────────────────────────────────────────────

    @property
    def view(self) -> SelectionView:
        return SelectionView(
            state=self.state,
            available_loader_versions=tuple(self.available_loader_versions),
            platform_versions=self.catalogs.platform_versions,
        )

    def _recompute(self) -> None:
        available, loader_version = derive_loader_versions(
            self.catalogs, self.state.platform_version, self.state.loader_family
        )
        self.available_loader_versions = available
        self.state = replace(self.state, loader_version=loader_version)
        logger.debug("Selection re-derived: %s (options=%d)", self.state, len(available))

    # ── Catalog updates ────────────────────────────────────────────────────

    def set_platform_versions(self, raw: Any) -> None:
        versions = tuple(coerce_version_list(raw))
        self.catalogs = replace(self.catalogs, platform_versions=versions)
        self._recompute()

    def set_forge_catalog(self, raw: Any) -> None:
        """Normalize raw Forge promotions and re-derive."""
        self.catalogs = replace(self.catalogs, forge=normalize_forge_catalog(raw))
        self._recompute()

    def set_fabric_catalog(self, raw: Any) -> None:
        self.catalogs = replace(self.catalogs, fabric=tuple(coerce_version_list(raw)))
        self._recompute()

    # ── User selections ────────────────────────────────────────────────────

    def select_platform_version(self, platform_version: str) -> None:
        self.state = replace(self.state, platform_version=platform_version or "")
        self._recompute()

    def select_loader_family(self, loader_family: "str | LoaderFamily") -> None:
        family = LoaderFamily.parse(loader_family)
        self.state = replace(self.state, loader_family=family)
        self._recompute()

    def select_loader_version(self, loader_version: str) -> None:
        """
        Pick one of the offered loader versions ("" clears the choice).

        Raises:
            SelectionError: *loader_version* is not currently offered.
        """
        loader_version = loader_version or ""
        if loader_version and loader_version not in self.available_loader_versions:
            raise SelectionError(
                f"{loader_version!r} is not an available "
                f"{self.state.loader_family.label} version"
            )
        self.state = replace(self.state, loader_version=loader_version)

    def restore(self, saved: SelectionState) -> None:
        """
        Seed the machine with a previously saved selection.

        Only the platform version and loader family are taken over; the
        loader version is re-derived like after any other event.
        """
        self.state = SelectionState(
            platform_version=saved.platform_version,
            loader_family=saved.loader_family,
        )
        self._recompute()
