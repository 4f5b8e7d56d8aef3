# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - External I/O
# PURPOSE: Catalog document transport
# ============================================================================
"""
Infrastructure Module

    from infrastructure import create_catalog_source

    source = create_catalog_source("https://example.org/data/catalog.json")
    document = await source.fetch()
"""

from .catalog_source import (
    CatalogSource,
    FileCatalogSource,
    HttpCatalogSource,
    create_catalog_source,
)

__all__ = [
    "CatalogSource",
    "FileCatalogSource",
    "HttpCatalogSource",
    "create_catalog_source",
]
