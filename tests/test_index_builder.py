# ============================================================================
# INDEX BUILDER TESTS
# ============================================================================
# STATUS: Tests - Shape detection, parsing and index construction
# PURPOSE: Verify both catalog shapes produce consistent lookup maps
# ============================================================================
"""
Index Builder Tests

Unit tests for:
- detect_shape (list / normalized / embedded / malformed)
- parse_catalog_document (per-record tolerance)
- build_index (normalized FK resolution, embedded merge by name)
- Reverse index ordering and duplicate handling
- Determinism

Run with:
    pytest tests/test_index_builder.py -v
"""

import pytest

from core.contracts import CatalogShape
from core.errors import FormatError
from core.models import EmbeddedCatalog, NormalizedCatalog
from services.index_builder import build_index, detect_shape, lookup, parse_catalog_document


def _index(document):
    return build_index(parse_catalog_document(document))


# ============================================================================
# SHAPE DETECTION
# ============================================================================

class TestDetectShape:

    def test_top_level_list_is_embedded(self):
        assert detect_shape([]) == CatalogShape.EMBEDDED

    def test_attributes_key_is_normalized(self):
        assert detect_shape({"datasets": [], "attributes": []}) == CatalogShape.NORMALIZED

    def test_datasets_with_inline_attributes_is_embedded(self):
        doc = {"datasets": [{"id": "a", "attributes": [{"name": "x"}]}]}
        assert detect_shape(doc) == CatalogShape.EMBEDDED

    def test_datasets_only_is_normalized(self):
        assert detect_shape({"datasets": [{"id": "a"}]}) == CatalogShape.NORMALIZED

    @pytest.mark.parametrize("document", [
        "catalog",
        42,
        None,
        {"items": []},
        {"datasets": "not a list"},
        {"datasets": [], "attributes": {"w": {}}},
    ])
    def test_malformed_documents_rejected(self, document):
        with pytest.raises(FormatError):
            detect_shape(document)


# ============================================================================
# PARSING
# ============================================================================

class TestParseCatalogDocument:

    def test_normalized(self, normalized_doc):
        catalog = parse_catalog_document(normalized_doc)
        assert isinstance(catalog, NormalizedCatalog)
        assert catalog.shape == CatalogShape.NORMALIZED
        assert len(catalog.datasets) == 3
        assert len(catalog.attributes) == 4

    def test_embedded(self, embedded_doc):
        catalog = parse_catalog_document(embedded_doc)
        assert isinstance(catalog, EmbeddedCatalog)
        assert [ds.id for ds in catalog.datasets] == ["fuels_2020", "fuels_2021"]

    def test_non_object_records_skipped(self):
        catalog = parse_catalog_document({
            "datasets": [{"id": "a"}, "junk", 7, {"id": "b"}],
            "attributes": [None, {"id": "w"}],
        })
        assert [ds.id for ds in catalog.datasets] == ["a", "b"]
        assert [a.id for a in catalog.attributes] == ["w"]


# ============================================================================
# NORMALIZED INDEX
# ============================================================================

class TestNormalizedIndex:

    def test_roads_width_scenario(self):
        index = _index({
            "datasets": [{"id": "A", "title": "Roads", "attribute_ids": ["w"]}],
            "attributes": [{"id": "w", "label": "Width", "type": "float"}],
        })
        dataset = index.dataset_by_id["A"]
        keys = index.attribute_keys_for(dataset)

        assert [index.attribute_by_key[k].label for k in keys] == ["Width"]
        assert [ds.id for ds in index.datasets_by_attribute["w"]] == ["A"]

    def test_reverse_index_document_order(self, normalized_doc):
        index = _index(normalized_doc)
        assert [ds.id for ds in index.datasets_by_attribute["width"]] == ["roads", "wildfire"]

    def test_unknown_reference_still_indexed_in_reverse(self, normalized_doc):
        index = _index(normalized_doc)
        assert "missing_attr" not in index.attribute_by_key
        assert [ds.id for ds in index.datasets_by_attribute["missing_attr"]] == ["wells"]

    def test_duplicate_attribute_ids_kept(self):
        index = _index({
            "datasets": [{"id": "A", "attribute_ids": ["w", "w"]}],
            "attributes": [{"id": "w"}],
        })
        assert [ds.id for ds in index.datasets_by_attribute["w"]] == ["A", "A"]

    def test_example_seeds_examples(self, normalized_doc):
        index = _index(normalized_doc)
        assert index.attribute_by_key["width"].examples == [12.5]
        assert index.attribute_by_key["depth"].examples == [0]
        assert index.attribute_by_key["surface"].examples == []

    def test_entities_without_id_dropped(self):
        index = _index({
            "datasets": [{"title": "No id"}, {"id": "a"}],
            "attributes": [{"label": "No id"}, {"id": "w"}],
        })
        assert [ds.id for ds in index.datasets] == ["a"]
        assert [a.key for a in index.attributes] == ["w"]

    def test_duplicate_dataset_id_later_wins(self):
        index = _index({
            "datasets": [{"id": "a", "title": "First"}, {"id": "a", "title": "Second"}],
            "attributes": [],
        })
        assert index.dataset_by_id["a"].title == "Second"
        assert len(index.datasets) == 2


# ============================================================================
# EMBEDDED INDEX
# ============================================================================

class TestEmbeddedIndex:

    def test_fuel_type_merged_once(self, embedded_doc):
        index = _index(embedded_doc)
        fuel_types = [a for a in index.attributes if a.key == "fuel_type"]
        assert len(fuel_types) == 1

    def test_examples_deduplicated_first_seen(self, embedded_doc):
        index = _index(embedded_doc)
        assert index.attribute_by_key["fuel_type"].examples == ["grass", "timber"]

    def test_first_definition_wins(self, embedded_doc):
        index = _index(embedded_doc)
        assert index.attribute_by_key["fuel_type"].label == "Fuel Type"

    def test_dataset_listed_once_per_name(self, embedded_doc):
        index = _index(embedded_doc)
        assert [ds.id for ds in index.datasets_by_attribute["fuel_type"]] == [
            "fuels_2020",
            "fuels_2021",
        ]

    def test_attribute_keys_for_dataset(self, embedded_doc):
        index = _index(embedded_doc)
        assert index.attribute_keys_for(index.dataset_by_id["fuels_2020"]) == ["fuel_type", "acres"]
        assert index.attribute_keys_for(index.dataset_by_id["fuels_2021"]) == ["fuel_type"]

    def test_object_with_datasets_key(self, embedded_doc):
        index = _index({"datasets": embedded_doc})
        assert index.shape == CatalogShape.EMBEDDED
        assert "acres" in index.attribute_by_key


# ============================================================================
# GENERAL
# ============================================================================

class TestIndexGeneral:

    def test_deterministic(self, normalized_doc):
        first = _index(normalized_doc)
        second = _index(normalized_doc)
        assert list(first.dataset_by_id) == list(second.dataset_by_id)
        assert list(first.attribute_by_key) == list(second.attribute_by_key)
        assert {k: [d.id for d in v] for k, v in first.datasets_by_attribute.items()} == \
            {k: [d.id for d in v] for k, v in second.datasets_by_attribute.items()}

    def test_maps_are_read_only(self, normalized_doc):
        index = _index(normalized_doc)
        with pytest.raises(TypeError):
            index.dataset_by_id["new"] = None

    def test_empty_catalog(self):
        index = _index({"datasets": [], "attributes": []})
        assert index.datasets == ()
        assert dict(index.datasets_by_attribute) == {}

    def test_lookup_treats_empty_key_as_miss(self, normalized_doc):
        index = _index(normalized_doc)
        assert lookup(index.dataset_by_id, "") is None
        assert lookup(index.dataset_by_id, None) is None
        assert lookup(index.dataset_by_id, "roads").title == "Roads"
