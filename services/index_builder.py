# ============================================================================
# CATALOG INDEX BUILDER
# ============================================================================
# STATUS: Core - Shape adapter and index construction
# PURPOSE: Turn a raw catalog document into lookup maps and a reverse index
# ============================================================================
"""
Catalog Index Builder

Two pure steps, run once per loaded document:

1. parse_catalog_document(raw) -> NormalizedCatalog | EmbeddedCatalog
   Detects the shape and validates each entity. Top-level shape errors
   raise FormatError (nothing is indexed); a bad individual record is
   skipped with a warning.

2. build_index(catalog) -> CatalogIndex
   Builds the id -> entity maps and the attribute -> datasets reverse map.

Reverse-map rules per shape:
- Normalized: one entry per attribute_ids element, so a dataset listing
  the same id twice appears twice.
- Embedded: records are merged by name; a dataset appears once per name.
  The first record defining a name supplies the descriptive fields, and
  `examples` gathers distinct example values in first-seen order.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from core.contracts import CatalogShape
from core.errors import FormatError
from core.logging import ComponentType, get_logger, log_checkpoint
from core.models import Attribute, Catalog, Dataset, EmbeddedCatalog, NormalizedCatalog

logger = get_logger(__name__, ComponentType.INDEX)


# ============================================================================
# INDEX
# ============================================================================

@dataclass(frozen=True)
class CatalogIndex:
    """
    Derived, read-only view of a loaded catalog.

    All mappings preserve document order and are exposed as
    MappingProxyType so they cannot be mutated after the build.
    """
    shape: CatalogShape
    datasets: Tuple[Dataset, ...]
    attributes: Tuple[Attribute, ...]
    dataset_by_id: Mapping[str, Dataset]
    attribute_by_key: Mapping[str, Attribute]
    datasets_by_attribute: Mapping[str, Tuple[Dataset, ...]]

    def attribute_keys_for(self, dataset: Dataset) -> List[str]:
        """Attribute references of a dataset under this catalog's shape."""
        if self.shape == CatalogShape.NORMALIZED:
            return list(dataset.attribute_ids)
        return dataset.embedded_attribute_keys


# ============================================================================
# SHAPE ADAPTER
# ============================================================================

def _parse_records(records: List[Any], model, kind: str) -> list:
    parsed = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping {kind} #{position}: expected an object, got {type(record).__name__}")
            continue
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping {kind} #{position}: {e.error_count()} validation error(s)")
    return parsed


def detect_shape(document: Any) -> CatalogShape:
    """
    Decide the catalog shape from the top-level structure.

    Raises:
        FormatError: Neither a list nor an object with a `datasets` list.
    """
    if isinstance(document, list):
        return CatalogShape.EMBEDDED

    if not isinstance(document, dict) or "datasets" not in document:
        raise FormatError(
            "Catalog must be a list of datasets or an object with a 'datasets' key, "
            f"got {type(document).__name__}"
        )

    datasets = document["datasets"]
    if not isinstance(datasets, list):
        raise FormatError(f"'datasets' must be a list, got {type(datasets).__name__}")

    if "attributes" in document:
        if not isinstance(document["attributes"], list):
            raise FormatError(
                f"'attributes' must be a list, got {type(document['attributes']).__name__}"
            )
        return CatalogShape.NORMALIZED

    embeds = any(
        isinstance(ds, dict) and isinstance(ds.get("attributes"), list)
        for ds in datasets
    )
    return CatalogShape.EMBEDDED if embeds else CatalogShape.NORMALIZED


def parse_catalog_document(document: Any) -> Catalog:
    """
    Resolve the shape of a raw document and validate its entities.

    Raises:
        FormatError: Top-level structure is not a catalog.
    """
    shape = detect_shape(document)
    raw_datasets = document if isinstance(document, list) else document["datasets"]
    datasets = _parse_records(raw_datasets, Dataset, "dataset")

    if shape == CatalogShape.NORMALIZED:
        raw_attributes = document.get("attributes", []) if isinstance(document, dict) else []
        attributes = _parse_records(raw_attributes, Attribute, "attribute")
        return NormalizedCatalog(datasets=datasets, attributes=attributes)

    return EmbeddedCatalog(datasets=datasets)


# ============================================================================
# INDEX CONSTRUCTION
# ============================================================================

def _index_datasets(datasets: List[Dataset]) -> Tuple[List[Dataset], Dict[str, Dataset]]:
    kept: List[Dataset] = []
    by_id: Dict[str, Dataset] = {}
    for ds in datasets:
        if not ds.id:
            logger.warning(f"Skipping dataset without id: {ds.title or '<untitled>'}")
            continue
        if ds.id in by_id:
            logger.warning(f"Duplicate dataset id {ds.id}: later record replaces earlier one")
        by_id[ds.id] = ds
        kept.append(ds)
    return kept, by_id


def _build_normalized(catalog: NormalizedCatalog) -> CatalogIndex:
    datasets, dataset_by_id = _index_datasets(catalog.datasets)

    attributes: List[Attribute] = []
    attribute_by_key: Dict[str, Attribute] = {}
    for attr in catalog.attributes:
        if not attr.key:
            logger.warning(f"Skipping attribute without id: {attr.label or '<unlabelled>'}")
            continue
        if attr.has_example and not attr.examples:
            attr = attr.with_examples([attr.example])
        if attr.key in attribute_by_key:
            logger.warning(f"Duplicate attribute id {attr.key}: later record replaces earlier one")
        attribute_by_key[attr.key] = attr
        attributes.append(attr)

    reverse: Dict[str, List[Dataset]] = {}
    for ds in datasets:
        for attr_id in ds.attribute_ids:
            reverse.setdefault(attr_id, []).append(ds)

    return _freeze(CatalogShape.NORMALIZED, datasets, attributes, dataset_by_id, attribute_by_key, reverse)


def _merge_examples(examples: List[Any], record: Attribute) -> None:
    candidates = list(record.examples)
    if record.has_example:
        candidates.insert(0, record.example)
    for value in candidates:
        # Equality check rather than a set: example values may be unhashable
        if value not in examples:
            examples.append(value)


def _build_embedded(catalog: EmbeddedCatalog) -> CatalogIndex:
    datasets, dataset_by_id = _index_datasets(catalog.datasets)

    first_seen: Dict[str, Attribute] = {}
    examples: Dict[str, List[Any]] = {}
    reverse: Dict[str, List[Dataset]] = {}

    for ds in datasets:
        for record in ds.attributes:
            key = record.key
            if not key:
                logger.warning(f"Skipping unnamed attribute in dataset {ds.id}")
                continue
            if key not in first_seen:
                first_seen[key] = record
                examples[key] = []
            _merge_examples(examples[key], record)

        for key in ds.embedded_attribute_keys:
            reverse.setdefault(key, []).append(ds)

    attribute_by_key = {
        key: record.with_examples(examples[key])
        for key, record in first_seen.items()
    }
    attributes = list(attribute_by_key.values())

    return _freeze(CatalogShape.EMBEDDED, datasets, attributes, dataset_by_id, attribute_by_key, reverse)


def _freeze(
    shape: CatalogShape,
    datasets: List[Dataset],
    attributes: List[Attribute],
    dataset_by_id: Dict[str, Dataset],
    attribute_by_key: Dict[str, Attribute],
    reverse: Dict[str, List[Dataset]],
) -> CatalogIndex:
    return CatalogIndex(
        shape=shape,
        datasets=tuple(datasets),
        attributes=tuple(attributes),
        dataset_by_id=MappingProxyType(dataset_by_id),
        attribute_by_key=MappingProxyType(attribute_by_key),
        datasets_by_attribute=MappingProxyType(
            {key: tuple(entries) for key, entries in reverse.items()}
        ),
    )


def build_index(catalog: Catalog) -> CatalogIndex:
    """
    Build the lookup maps for a parsed catalog.

    Deterministic: the same catalog always yields identical maps in the
    same order.
    """
    if isinstance(catalog, NormalizedCatalog):
        index = _build_normalized(catalog)
    else:
        index = _build_embedded(catalog)

    log_checkpoint("index_built", {
        "shape": index.shape.value,
        "datasets": len(index.datasets),
        "attributes": len(index.attributes),
        "attribute_links": sum(len(v) for v in index.datasets_by_attribute.values()),
    })
    return index


def lookup(mapping: Mapping[str, Any], key: Optional[str]) -> Optional[Any]:
    """Map lookup that treats a missing or empty key as a miss."""
    if not key:
        return None
    return mapping.get(key)


__all__ = [
    "CatalogIndex",
    "detect_shape",
    "parse_catalog_document",
    "build_index",
    "lookup",
]
