# ============================================================================
# CATALOG ERRORS
# ============================================================================
# STATUS: Foundation - Exception hierarchy
# PURPOSE: Typed failures for catalog loading and access
# ============================================================================
"""
Catalog Errors

    CatalogError
    ├── LoadError              transport failure or non-success status
    ├── FormatError            payload is not a recognised catalog shape
    └── CatalogNotLoadedError  lookup attempted before a successful load

A lookup miss is not an error: store lookups return None and the
navigation resolver returns NotFound.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog failures."""


class LoadError(CatalogError):
    """The catalog document could not be fetched."""

    def __init__(self, status: Optional[int], location: str, detail: str = ""):
        self.status = status
        self.location = location
        self.detail = detail
        message = f"Failed to load catalog from {location}"
        if status is not None:
            message += f": {status}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class FormatError(CatalogError):
    """The catalog payload does not match either supported shape."""


class CatalogNotLoadedError(CatalogError):
    """The store was read before load() completed."""

    def __init__(self):
        super().__init__("Catalog has not been loaded")


__all__ = [
    "CatalogError",
    "LoadError",
    "FormatError",
    "CatalogNotLoadedError",
]
