# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Catalog documents and an in-memory source
# PURPOSE: Fixtures shared by store, navigation, route and export tests
# ============================================================================
"""
Shared fixtures.

Catalog documents are returned fresh per test so a test may mutate its
copy. StaticSource stands in for HTTP/file sources and counts fetches.
"""

import asyncio
import copy

import pytest

from core.config import reset_config
from services.catalog_store import CatalogStore


NORMALIZED_DOC = {
    "datasets": [
        {
            "id": "roads",
            "title": "Roads",
            "description": "Road centerlines",
            "objname": "Roads_Line",
            "geometry_type": "POLYLINE",
            "topics": ["Transportation"],
            "keywords": ["routes"],
            "projection": "EPSG:26912",
            "attribute_ids": ["width", "surface"],
        },
        {
            "id": "wildfire",
            "title": "Wildfire Risk Zones",
            "description": "Modelled hazard",
            "geometry_type": "polygon",
            "topics": ["Fire", "Hazards"],
            "keywords": ["risk"],
            "attribute_ids": ["risk_class", "width"],
        },
        {
            "id": "wells",
            "title": "Water Wells",
            "geometry_type": "POINT",
            "topics": ["Water", "Fire"],
            "attribute_ids": ["depth", "missing_attr"],
        },
    ],
    "attributes": [
        {"id": "width", "label": "Width", "type": "float", "example": 12.5},
        {
            "id": "surface",
            "label": "Surface",
            "type": "enumerated",
            "values": [
                {"code": 1, "label": "Paved", "description": "Asphalt"},
                {"code": 2, "label": "Gravel", "description": "Improved gravel"},
            ],
        },
        {
            "id": "risk_class",
            "label": "Risk Class",
            "type": "enumerated",
            "description": "Fire risk",
            "values": [{"code": "H", "label": "High", "description": "High hazard"}],
        },
        {"id": "depth", "label": "Depth", "type": "integer", "example": 0},
    ],
}

EMBEDDED_DOC = [
    {
        "id": "fuels_2020",
        "title": "Fuels 2020",
        "geometry_type": "POLYGON",
        "topics": ["Fire"],
        "attributes": [
            {"name": "fuel_type", "label": "Fuel Type", "type": "string", "example": "grass"},
            {"name": "acres", "label": "Acres", "type": "float"},
        ],
    },
    {
        "id": "fuels_2021",
        "title": "Fuels 2021",
        "geometry_type": "POLYGON",
        "topics": ["Fire"],
        "attributes": [
            {"name": "fuel_type", "label": "Fuel (renamed)", "type": "string", "example": "timber"},
            {"name": "fuel_type", "label": "Duplicate", "example": "grass"},
        ],
    },
]


class StaticSource:
    """In-memory catalog source that counts fetches."""

    def __init__(self, document=None, error=None, location="memory://catalog.json"):
        self.location = location
        self.document = document
        self.error = error
        self.fetch_count = 0

    async def fetch(self):
        self.fetch_count += 1
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.document)


def make_store(document):
    """A loaded store over a document."""
    store = CatalogStore(StaticSource(document))
    asyncio.run(store.load())
    return store


@pytest.fixture
def normalized_doc():
    return copy.deepcopy(NORMALIZED_DOC)


@pytest.fixture
def embedded_doc():
    return copy.deepcopy(EMBEDDED_DOC)


@pytest.fixture
def normalized_store():
    return make_store(NORMALIZED_DOC)


@pytest.fixture
def embedded_store():
    return make_store(EMBEDDED_DOC)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Each test reads configuration from a clean environment."""
    for name in (
        "CATALOG_LOCATION",
        "CATALOG_FETCH_TIMEOUT",
        "CATALOG_ISSUE_URL",
        "CATALOG_FOCUS_POLICY",
        "CATALOG_TEMPLATES_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
