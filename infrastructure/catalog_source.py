# ============================================================================
# CATALOG SOURCE INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - Fetch the raw catalog document
# PURPOSE: Read catalog.json over HTTP (httpx) or from the local filesystem
# ============================================================================
"""
Catalog Source

A source knows where the catalog document lives and returns it decoded.
It does not cache and does not interpret the shape: the CatalogStore
caches, the index builder interprets.

    HttpCatalogSource  - http(s) URL, httpx.AsyncClient
    FileCatalogSource  - local path

Transport failures raise LoadError (with the HTTP status when there is
one). A payload that is not JSON raises FormatError.
"""

import json
from pathlib import Path
from typing import Any, Optional, Protocol

import httpx

from core.errors import FormatError, LoadError
from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.INFRASTRUCTURE)


class CatalogSource(Protocol):
    """Anything that can produce the raw catalog document."""

    location: str

    async def fetch(self) -> Any:
        ...


class HttpCatalogSource:
    """Fetch the catalog over HTTP."""

    def __init__(self, url: str, timeout: float = 30.0):
        self.location = url
        self._timeout = httpx.Timeout(timeout)

    async def fetch(self) -> Any:
        """
        GET the catalog document.

        Raises:
            LoadError: Connection failure, timeout, or non-2xx status.
            FormatError: Body is not valid JSON.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                resp = await client.get(self.location)
        except httpx.TimeoutException as e:
            logger.error(f"Catalog fetch timed out: {self.location}: {e}")
            raise LoadError(None, self.location, "timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"Cannot reach catalog at {self.location}: {e}")
            raise LoadError(None, self.location, str(e)) from e

        if not resp.is_success:
            logger.error(f"Catalog fetch returned {resp.status_code}: {self.location}")
            raise LoadError(resp.status_code, self.location)

        try:
            return resp.json()
        except ValueError as e:
            raise FormatError(f"Catalog at {self.location} is not valid JSON: {e}") from e


class FileCatalogSource:
    """Read the catalog from a local file."""

    def __init__(self, path: str):
        self.location = str(path)
        self._path = Path(path)

    async def fetch(self) -> Any:
        """
        Read and decode the catalog file.

        Raises:
            LoadError: File missing (404) or unreadable.
            FormatError: File is not valid JSON.
        """
        if not self._path.is_file():
            raise LoadError(404, self.location, "file not found")

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(None, self.location, str(e)) from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"Catalog at {self.location} is not valid JSON: {e}") from e


def create_catalog_source(location: str, timeout: Optional[float] = None) -> CatalogSource:
    """Pick the source implementation for a URL or path."""
    if location.startswith(("http://", "https://")):
        return HttpCatalogSource(location, timeout=timeout or 30.0)
    return FileCatalogSource(location)


__all__ = [
    "CatalogSource",
    "HttpCatalogSource",
    "FileCatalogSource",
    "create_catalog_source",
]
