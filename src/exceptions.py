"""
Project-wide custom exception hierarchy.
All modules raise subclasses of InstallerBaseError — never bare Exception.
"""

__all__ = [
    "InstallerBaseError",
    "CatalogError",
    "CatalogFetchError",
    "SelectionError",
    "InstallError",
    "InstallerNotFoundError",
    "StoreError",
]


class InstallerBaseError(Exception):
    """Root exception for all mod-loader-installer errors."""


# ── Catalog ───────────────────────────────────────────────────────────────────

class CatalogError(InstallerBaseError):
    """Raised when a version catalog cannot be produced."""


class CatalogFetchError(CatalogError):
    """Raised when an upstream catalog request fails (network, HTTP, JSON)."""


# ── Selection ─────────────────────────────────────────────────────────────────

class SelectionError(InstallerBaseError):
    """Raised when a selection value is not one of the offered options."""


# ── Installation ──────────────────────────────────────────────────────────────

class InstallError(InstallerBaseError):
    """Raised when the installation job fails."""


class InstallerNotFoundError(InstallError):
    """Raised when the Java runtime needed to run an installer is missing."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(InstallerBaseError):
    """Raised on SQLite / store I/O errors."""
