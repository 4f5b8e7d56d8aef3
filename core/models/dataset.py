# ============================================================================
# DATASET MODEL
# ============================================================================
# STATUS: Domain model - Catalog entry for a geospatial layer or table
# PURPOSE: Dataset description, ownership, access and attribute references
# ============================================================================
"""
Dataset Model

One described GIS layer (or non-spatial table). Attribute references are
either foreign keys (`attribute_ids`) or embedded attribute records
(`attributes`); which one applies is decided by the catalog shape.

Parsing is lenient: catalog documents are hand-edited, so scalar text
fields are coerced to strings and list fields tolerate missing or
malformed values.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import GeometryType
from core.models.attribute import Attribute


class Distribution(BaseModel):
    """An access point for the dataset (service, download, ...)."""

    type: Optional[str] = None
    format: Optional[str] = None
    url: Optional[str] = None

    model_config = {"extra": "allow", "frozen": True}


class MetadataReference(BaseModel):
    """Pointer to the formal metadata record."""

    standard: Optional[str] = None
    xml_url: Optional[str] = None

    model_config = {"extra": "allow", "frozen": True}


def _text_list(v: Any) -> List[str]:
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    if not isinstance(v, list):
        return []
    return [str(item) for item in v if item is not None and item != ""]


class Dataset(BaseModel):
    """
    Catalog dataset.
    Unknown document fields are kept so change requests echo the full record.
    """

    # Identity
    id: Optional[str] = Field(default=None, description="Stable dataset identifier")
    title: Optional[str] = None
    description: Optional[str] = None
    objname: Optional[str] = Field(default=None, description="Feature class / table name")

    # Ownership
    office_owner: Optional[str] = None
    owner: Optional[str] = None
    contact_email: Optional[str] = None

    # Classification
    geometry_type: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)

    # Lifecycle / access
    status: Optional[str] = None
    access_level: Optional[str] = None
    update_frequency: Optional[str] = None
    last_updated: Optional[str] = None

    # Services and references
    public_web_service: Optional[str] = None
    internal_web_service: Optional[str] = None
    data_standard: Optional[str] = None
    distribution: List[Distribution] = Field(default_factory=list)
    metadata: Optional[MetadataReference] = None
    projection: Optional[str] = Field(default=None, description="e.g. 'EPSG:26912'")
    notes: Optional[str] = None

    # Attribute references
    attribute_ids: List[str] = Field(default_factory=list)
    attributes: List[Attribute] = Field(default_factory=list)

    model_config = {"extra": "allow", "frozen": True}

    # ----------------------------------------------------------------
    # Validators
    # ----------------------------------------------------------------

    @field_validator(
        "id", "title", "description", "objname", "office_owner", "owner",
        "contact_email", "geometry_type", "status", "access_level",
        "update_frequency", "last_updated", "public_web_service",
        "internal_web_service", "data_standard", "projection", "notes",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("topics", "keywords", "attribute_ids", mode="before")
    @classmethod
    def coerce_text_list(cls, v: Any) -> List[str]:
        return _text_list(v)

    @field_validator("distribution", "attributes", mode="before")
    @classmethod
    def coerce_record_list(cls, v: Any) -> List[Any]:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_metadata(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else None

    # ----------------------------------------------------------------
    # Derived
    # ----------------------------------------------------------------

    @property
    def display_name(self) -> str:
        """Title, falling back to the id."""
        return self.title or self.id or ""

    @property
    def geometry(self) -> GeometryType:
        return GeometryType.parse(self.geometry_type)

    @property
    def owner_name(self) -> Optional[str]:
        return self.office_owner or self.owner

    @property
    def embedded_attribute_keys(self) -> List[str]:
        """Keys of embedded attribute records, duplicates removed, order kept."""
        keys: List[str] = []
        for attr in self.attributes:
            if attr.key and attr.key not in keys:
                keys.append(attr.key)
        return keys


__all__ = ["Dataset", "Distribution", "MetadataReference"]
