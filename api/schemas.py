# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models for the catalog JSON API
# ============================================================================
"""
API Schemas

Response models for the read-only catalog API. Entity payloads are the
records as written in the catalog document (unknown fields included).
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from core.contracts import NotFound, Resolution, Route, ViewKind
from core.models import Attribute, CodedValue, Dataset
from services.navigation import encode_locator


# ============================================================================
# SUMMARIES
# ============================================================================

class DatasetSummary(BaseModel):
    """List entry for a dataset."""
    id: str
    title: str
    geometry_type: str
    geometry_icon: str = ""
    topics: List[str] = Field(default_factory=list)
    locator: str

    @classmethod
    def from_dataset(cls, dataset: Dataset) -> "DatasetSummary":
        return cls(
            id=dataset.id or "",
            title=dataset.display_name,
            geometry_type=dataset.geometry.value,
            geometry_icon=dataset.geometry.icon(),
            topics=list(dataset.topics),
            locator=encode_locator(ViewKind.DATASET, dataset.id or ""),
        )


class AttributeSummary(BaseModel):
    """List entry for an attribute."""
    key: str
    label: str = ""
    type: str
    locator: str

    @classmethod
    def from_attribute(cls, attribute: Attribute) -> "AttributeSummary":
        return cls(
            key=attribute.key or "",
            label=attribute.label or "",
            type=attribute.attribute_type.value,
            locator=encode_locator(ViewKind.ATTRIBUTE, attribute.key or ""),
        )


# ============================================================================
# DETAILS
# ============================================================================

class DatasetDetailResponse(BaseModel):
    """A dataset with its resolved attributes."""
    dataset: Dict[str, Any]
    attributes: List[AttributeSummary] = Field(default_factory=list)
    issue_url: str
    schema_url: str


class AttributeDetailResponse(BaseModel):
    """An attribute with its coded values and referencing datasets."""
    attribute: Dict[str, Any]
    examples: List[Any] = Field(default_factory=list)
    coded_values: List[CodedValue] = Field(default_factory=list)
    datasets: List[DatasetSummary] = Field(default_factory=list)
    issue_url: str


class ChangeRequestResponse(BaseModel):
    url: str


class TopicsResponse(BaseModel):
    topics: List[str] = Field(default_factory=list)


class ResolveResponse(BaseModel):
    """Outcome of resolving a locator."""
    status: Literal["found", "not_found", "no_route"]
    view: Optional[str] = None
    entity_id: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> "ResolveResponse":
        if isinstance(resolution, Route):
            return cls(status="found", view=resolution.view.value, entity_id=resolution.entity_id)
        if isinstance(resolution, NotFound):
            return cls(
                status="not_found",
                view=resolution.view.value,
                entity_id=resolution.entity_id,
                message=resolution.message,
            )
        return cls(status="no_route", message=f"Not a locator: {resolution.locator!r}")


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    version: str
    catalog_location: str
    catalog_loaded: bool
    catalog_error: Optional[str] = None
    datasets: int = 0
    attributes: int = 0
