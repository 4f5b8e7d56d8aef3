# ============================================================================
# CHANGE REQUEST LINK TESTS
# ============================================================================
# STATUS: Tests - Pre-filled issue URLs
# PURPOSE: Verify title, body and encoding of "suggest a change" links
# ============================================================================
"""
Change Request Link Tests

Run with:
    pytest tests/test_change_request.py -v
"""

import json
from urllib.parse import parse_qs, urlsplit

from conftest import EMBEDDED_DOC, NORMALIZED_DOC, make_store
from core.models import Attribute, Dataset
from services.change_request import (
    encode_uri_component,
    entity_json,
    issue_url_for_attribute,
    issue_url_for_dataset,
)

BASE = "https://github.com/example/catalog/issues/new"


def _query(url):
    parts = urlsplit(url)
    return parts, {k: v[0] for k, v in parse_qs(parts.query).items()}


class TestEncodeUriComponent:

    def test_matches_encode_uri_component(self):
        assert encode_uri_component("a b&c=d/e?") == "a%20b%26c%3Dd%2Fe%3F"
        assert encode_uri_component("keep-_.!~*'()") == "keep-_.!~*'()"
        assert encode_uri_component("1+1") == "1%2B1"


class TestEntityJson:

    def test_only_fields_present_in_record(self):
        ds = Dataset.model_validate({"id": "roads", "title": "Roads", "steward": "GIS"})
        assert json.loads(entity_json(ds)) == {"id": "roads", "title": "Roads", "steward": "GIS"}

    def test_indexed_attribute_matches_source_record(self):
        store = make_store(NORMALIZED_DOC)
        attr = store.get_attribute_by_id("width")

        assert attr.examples == [12.5]
        assert json.loads(entity_json(attr)) == NORMALIZED_DOC["attributes"][0]

    def test_merged_attribute_matches_first_record(self):
        store = make_store(EMBEDDED_DOC)
        attr = store.get_attribute_by_name("fuel_type")

        assert attr.examples == ["grass", "timber"]
        assert json.loads(entity_json(attr)) == EMBEDDED_DOC[0]["attributes"][0]

    def test_pretty_printed(self):
        assert "\n  " in entity_json(Attribute(id="w", label="Width"))


class TestIssueUrls:

    def test_dataset_link(self):
        ds = Dataset.model_validate({"id": "roads", "title": "Roads", "topics": ["Transportation"]})
        parts, query = _query(issue_url_for_dataset(ds, BASE))

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == BASE
        assert query["title"] == "Dataset change request: roads"
        assert "dataset `roads` (`Roads`)" in query["body"]
        assert "Current dataset JSON:" in query["body"]
        assert "```json" in query["body"]

        embedded = query["body"].split("```json\n", 1)[1].rsplit("\n```", 1)[0]
        assert json.loads(embedded)["topics"] == ["Transportation"]

    def test_attribute_link(self):
        attr = Attribute.model_validate({"id": "width", "label": "Width", "type": "float"})
        _, query = _query(issue_url_for_attribute(attr, BASE))

        assert query["title"] == "Attribute change request: width"
        assert "attribute `width` (`Width`)" in query["body"]

    def test_embedded_attribute_uses_name(self):
        attr = Attribute.model_validate({"name": "fuel_type", "label": "Fuel Type"})
        _, query = _query(issue_url_for_attribute(attr, BASE))
        assert query["title"] == "Attribute change request: fuel_type"

    def test_default_base_from_config(self, monkeypatch):
        monkeypatch.setenv("CATALOG_ISSUE_URL", BASE)
        url = issue_url_for_dataset(Dataset(id="roads"))
        assert url.startswith(BASE + "?title=")
