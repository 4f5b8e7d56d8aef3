# ============================================================================
# API ROUTES
# ============================================================================
# STATUS: Core - FastAPI route definitions
# PURPOSE: Read-only JSON endpoints over the loaded catalog
# ============================================================================
"""
API Routes

Endpoints (mounted under /api/v1):
- GET /catalog/datasets?q=&topic=                 - Filtered dataset list
- GET /catalog/datasets/{dataset_id}              - Dataset + resolved attributes
- GET /catalog/datasets/{dataset_id}/attributes   - Resolved attributes
- GET /catalog/datasets/{dataset_id}/schema       - arcpy schema script (download)
- GET /catalog/datasets/{dataset_id}/change-request
- GET /catalog/attributes?q=                      - Filtered attribute list
- GET /catalog/attributes/{key}                   - Attribute + coded values + datasets
- GET /catalog/attributes/{key}/datasets          - Datasets using the attribute
- GET /catalog/attributes/{key}/change-request
- GET /catalog/topics                             - Facet values
- GET /catalog/resolve?locator=                   - Resolve a deep link

Mounted at the root:
- GET /health                                     - Version and catalog status
"""

from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from __version__ import __version__
from core.errors import CatalogError
from core.logging import ComponentType, get_logger
from core.models import Attribute, Dataset
from services.catalog_store import CatalogStore
from services.change_request import issue_url_for_attribute, issue_url_for_dataset
from services.navigation import resolve_locator
from services.query_engine import filter_attributes, filter_datasets
from services.schema_export import build_arcgis_schema_script, schema_filename
from .schemas import (
    AttributeDetailResponse,
    AttributeSummary,
    ChangeRequestResponse,
    DatasetDetailResponse,
    DatasetSummary,
    HealthResponse,
    ResolveResponse,
    TopicsResponse,
)

logger = get_logger(__name__, ComponentType.API)

router = APIRouter()

# Mounted without the /api/v1 prefix
health_router = APIRouter()


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# Set by the main app at startup

_catalog_store: Optional[CatalogStore] = None


def set_catalog_services(catalog_store: CatalogStore) -> None:
    """Called by main.py at startup to inject the catalog store."""
    global _catalog_store
    _catalog_store = catalog_store


def get_catalog_store() -> CatalogStore:
    """Get the catalog store, raising 503 if not initialized."""
    if _catalog_store is None:
        raise HTTPException(503, "Catalog store not initialized")
    return _catalog_store


async def get_loaded_store(store: CatalogStore = Depends(get_catalog_store)) -> CatalogStore:
    """The catalog store after a successful load; 503 with the reason otherwise."""
    try:
        await store.load()
    except CatalogError as e:
        raise HTTPException(503, f"Error loading catalog: {e}")
    return store


def _dataset_or_404(store: CatalogStore, dataset_id: str) -> Dataset:
    dataset = store.get_dataset_by_id(dataset_id)
    if dataset is None:
        raise HTTPException(404, f"Dataset not found: {dataset_id}")
    return dataset


def _attribute_or_404(store: CatalogStore, key: str) -> Attribute:
    attribute = store.get_attribute_by_id(key)
    if attribute is None:
        raise HTTPException(404, f"Attribute not found: {key}")
    return attribute


def schema_path(dataset_id: str) -> str:
    """Download path of a dataset's schema script (id percent-encoded)."""
    return f"/api/v1/catalog/datasets/{quote(dataset_id, safe='')}/schema"


def attachment_header(filename: str) -> str:
    """Content-Disposition value with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "_").replace("?", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


# ============================================================================
# HEALTH
# ============================================================================

@health_router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health(store: CatalogStore = Depends(get_catalog_store)):
    """Version and catalog status. Does not trigger a load."""
    loaded = store.is_loaded
    return HealthResponse(
        status="ok" if loaded or store.last_error is None else "degraded",
        version=__version__,
        catalog_location=store.source.location,
        catalog_loaded=loaded,
        catalog_error=str(store.last_error) if store.last_error else None,
        datasets=len(store.datasets) if loaded else 0,
        attributes=len(store.attributes) if loaded else 0,
    )


# ============================================================================
# DATASETS
# ============================================================================

@router.get("/catalog/datasets", response_model=List[DatasetSummary], tags=["Datasets"])
async def list_datasets(
    q: str = Query("", description="Case-insensitive substring"),
    topic: Optional[str] = Query(None, description="Exact topic facet"),
    store: CatalogStore = Depends(get_loaded_store),
):
    """Datasets matching the query and topic, in catalog order."""
    return [DatasetSummary.from_dataset(ds) for ds in filter_datasets(store.datasets, q, topic)]


@router.get("/catalog/datasets/{dataset_id}", response_model=DatasetDetailResponse, tags=["Datasets"])
async def get_dataset(dataset_id: str, store: CatalogStore = Depends(get_loaded_store)):
    dataset = _dataset_or_404(store, dataset_id)
    return DatasetDetailResponse(
        dataset=dataset.model_dump(mode="json", exclude_unset=True),
        attributes=[
            AttributeSummary.from_attribute(a) for a in store.get_attributes_for_dataset(dataset)
        ],
        issue_url=issue_url_for_dataset(dataset),
        schema_url=schema_path(dataset_id),
    )


@router.get(
    "/catalog/datasets/{dataset_id}/attributes",
    response_model=List[AttributeSummary],
    tags=["Datasets"],
)
async def get_dataset_attributes(dataset_id: str, store: CatalogStore = Depends(get_loaded_store)):
    dataset = _dataset_or_404(store, dataset_id)
    return [AttributeSummary.from_attribute(a) for a in store.get_attributes_for_dataset(dataset)]


@router.get("/catalog/datasets/{dataset_id}/schema", response_class=PlainTextResponse, tags=["Datasets"])
async def export_dataset_schema(dataset_id: str, store: CatalogStore = Depends(get_loaded_store)):
    """arcpy script creating the dataset's feature class, as a download."""
    dataset = _dataset_or_404(store, dataset_id)
    script = build_arcgis_schema_script(dataset, store.get_attributes_for_dataset(dataset))
    logger.info(f"Exported schema script for dataset {dataset_id}")
    return PlainTextResponse(
        script,
        headers={"Content-Disposition": attachment_header(schema_filename(dataset))},
    )


@router.get(
    "/catalog/datasets/{dataset_id}/change-request",
    response_model=ChangeRequestResponse,
    tags=["Datasets"],
)
async def dataset_change_request(dataset_id: str, store: CatalogStore = Depends(get_loaded_store)):
    return ChangeRequestResponse(url=issue_url_for_dataset(_dataset_or_404(store, dataset_id)))


# ============================================================================
# ATTRIBUTES
# ============================================================================

@router.get("/catalog/attributes", response_model=List[AttributeSummary], tags=["Attributes"])
async def list_attributes(
    q: str = Query("", description="Case-insensitive substring"),
    store: CatalogStore = Depends(get_loaded_store),
):
    return [AttributeSummary.from_attribute(a) for a in filter_attributes(store.attributes, q)]


@router.get("/catalog/attributes/{key}", response_model=AttributeDetailResponse, tags=["Attributes"])
async def get_attribute(key: str, store: CatalogStore = Depends(get_loaded_store)):
    attribute = _attribute_or_404(store, key)
    return AttributeDetailResponse(
        attribute=attribute.model_dump(mode="json", exclude_unset=True),
        examples=list(attribute.examples),
        coded_values=attribute.coded_values,
        datasets=[DatasetSummary.from_dataset(ds) for ds in store.get_datasets_for_attribute(key)],
        issue_url=issue_url_for_attribute(attribute),
    )


@router.get(
    "/catalog/attributes/{key}/datasets",
    response_model=List[DatasetSummary],
    tags=["Attributes"],
)
async def get_attribute_datasets(key: str, store: CatalogStore = Depends(get_loaded_store)):
    _attribute_or_404(store, key)
    return [DatasetSummary.from_dataset(ds) for ds in store.get_datasets_for_attribute(key)]


@router.get(
    "/catalog/attributes/{key}/change-request",
    response_model=ChangeRequestResponse,
    tags=["Attributes"],
)
async def attribute_change_request(key: str, store: CatalogStore = Depends(get_loaded_store)):
    return ChangeRequestResponse(url=issue_url_for_attribute(_attribute_or_404(store, key)))


# ============================================================================
# FACETS / NAVIGATION
# ============================================================================

@router.get("/catalog/topics", response_model=TopicsResponse, tags=["Catalog"])
async def list_topics(store: CatalogStore = Depends(get_loaded_store)):
    return TopicsResponse(topics=store.topics)


@router.get("/catalog/resolve", response_model=ResolveResponse, tags=["Catalog"])
async def resolve(
    locator: str = Query("", description="e.g. dataset=roads or #attribute=width"),
    store: CatalogStore = Depends(get_loaded_store),
):
    """Resolve a deep-link locator. A miss is reported, not raised."""
    return ResolveResponse.from_resolution(resolve_locator(store, locator))
