# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Catalog logic layer
# PURPOSE: Store, index, query, navigation and export services
# ============================================================================
"""
Services Module

Catalog logic. Everything here is synchronous except CatalogStore.load().

Usage:
    from services import CatalogStore, filter_datasets

    store = CatalogStore(create_catalog_source("data/catalog.json"))
    await store.load()
    roads = filter_datasets(store.datasets, "roads")
"""

from .catalog_store import CatalogStore
from .index_builder import CatalogIndex, build_index, parse_catalog_document
from .query_engine import collect_topics, filter_attributes, filter_datasets
from .navigation import (
    InMemoryHistory,
    NavigationEvent,
    NavigationState,
    Navigator,
    encode_locator,
    parse_locator,
    resolve_locator,
)
from .change_request import issue_url_for_attribute, issue_url_for_dataset
from .schema_export import build_arcgis_schema_script, schema_filename

__all__ = [
    "CatalogStore",
    "CatalogIndex",
    "build_index",
    "parse_catalog_document",
    "collect_topics",
    "filter_attributes",
    "filter_datasets",
    "InMemoryHistory",
    "NavigationEvent",
    "NavigationState",
    "Navigator",
    "encode_locator",
    "parse_locator",
    "resolve_locator",
    "issue_url_for_attribute",
    "issue_url_for_dataset",
    "build_arcgis_schema_script",
    "schema_filename",
]
