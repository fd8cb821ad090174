"""Data models for the catalog module."""

from enum import Enum

from src.exceptions import SelectionError

__all__ = ["LoaderFamily"]


class LoaderFamily(str, Enum):
    FORGE  = "forge"     # keyed promotions: "<mc>-latest" / "<mc>-recommended"
    FABRIC = "fabric"    # flat installer list, first entry is the default

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: "str | LoaderFamily") -> "LoaderFamily":
        """Return the family for *value* (case-insensitive); raise SelectionError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise SelectionError(f"Unknown mod loader: {value!r}") from None
