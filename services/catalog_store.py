# ============================================================================
# CATALOG STORE
# ============================================================================
# STATUS: Core - Load-once catalog holder with read-only lookups
# PURPOSE: Own the loaded catalog and its index for the process lifetime
# ============================================================================
"""
CatalogStore

Created once at startup and injected into every reader (routes, tools).
The first successful load() fetches the document, resolves its shape and
builds the index; every later call returns the cached catalog without
touching the source. Concurrent first calls share a single fetch.

A failed load caches nothing, so the next load() starts over.

Lookups never raise for unknown ids; they return None. Reading before a
successful load raises CatalogNotLoadedError.
"""

import asyncio
from typing import List, Optional

from core.contracts import CatalogShape
from core.errors import CatalogError, CatalogNotLoadedError
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models import Attribute, Catalog, Dataset
from infrastructure.catalog_source import CatalogSource
from services.index_builder import CatalogIndex, build_index, lookup, parse_catalog_document
from services.query_engine import collect_topics

logger = get_logger(__name__, ComponentType.STORE)


class CatalogStore:
    """Single source of catalog data for the application."""

    def __init__(self, source: CatalogSource):
        self.source = source
        self._catalog: Optional[Catalog] = None
        self._index: Optional[CatalogIndex] = None
        self._topics: List[str] = []
        self._lock = asyncio.Lock()
        self.last_error: Optional[CatalogError] = None

    # ========================================================================
    # LOADING
    # ========================================================================

    async def load(self) -> Catalog:
        """
        Load the catalog (once).

        Raises:
            LoadError: Transport failure or non-success status.
            FormatError: Payload is not a recognised catalog shape.
        """
        if self._catalog is not None:
            return self._catalog

        async with self._lock:
            # Another caller may have finished while we waited
            if self._catalog is not None:
                return self._catalog

            with log_context(catalog_source=self.source.location, operation="load"):
                logger.info(f"Loading catalog from {self.source.location}")
                try:
                    document = await self.source.fetch()
                    catalog = parse_catalog_document(document)
                    index = build_index(catalog)
                except CatalogError as e:
                    self.last_error = e
                    logger.error(f"Catalog load failed: {e}")
                    raise

                self._index = index
                self._topics = collect_topics(index.datasets)
                self._catalog = catalog
                self.last_error = None
                log_checkpoint("catalog_loaded", {"topics": len(self._topics)})

        return self._catalog

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    @property
    def index(self) -> CatalogIndex:
        if self._index is None:
            raise CatalogNotLoadedError()
        return self._index

    @property
    def shape(self) -> CatalogShape:
        return self.index.shape

    # ========================================================================
    # COLLECTIONS
    # ========================================================================

    @property
    def datasets(self) -> List[Dataset]:
        """All indexed datasets in document order."""
        return list(self.index.datasets)

    @property
    def attributes(self) -> List[Attribute]:
        """All indexed attributes (merged in the embedded shape)."""
        return list(self.index.attributes)

    @property
    def topics(self) -> List[str]:
        """Distinct dataset topics, first-seen order."""
        if self._index is None:
            raise CatalogNotLoadedError()
        return list(self._topics)

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    def get_dataset_by_id(self, dataset_id: Optional[str]) -> Optional[Dataset]:
        """Dataset by id, or None."""
        return lookup(self.index.dataset_by_id, dataset_id)

    def get_attribute_by_id(self, attribute_id: Optional[str]) -> Optional[Attribute]:
        """Attribute by id (or, in the embedded shape, by name), or None."""
        return lookup(self.index.attribute_by_key, attribute_id)

    def get_attribute_by_name(self, name: Optional[str]) -> Optional[Attribute]:
        """Attribute by name; same key space as get_attribute_by_id."""
        return lookup(self.index.attribute_by_key, name)

    def get_attributes_for_dataset(self, dataset: Optional[Dataset]) -> List[Attribute]:
        """
        Resolved attributes of a dataset, in reference order.

        References to unknown attributes are dropped.
        """
        if dataset is None:
            return []
        index = self.index
        resolved = []
        for key in index.attribute_keys_for(dataset):
            attr = index.attribute_by_key.get(key)
            if attr is not None:
                resolved.append(attr)
        return resolved

    def get_datasets_for_attribute(self, attribute_key: Optional[str]) -> List[Dataset]:
        """Datasets referencing an attribute, in document order."""
        return list(lookup(self.index.datasets_by_attribute, attribute_key) or ())


__all__ = ["CatalogStore"]
