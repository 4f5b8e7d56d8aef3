# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums and result variants
# PURPOSE: Define catalog enums and navigation result contracts
# EXPORTS: GeometryType, AttributeType, ViewKind, CatalogShape, FocusPolicy,
#          Route, NotFound, NoRoute
# DEPENDENCIES: enum, dataclasses
# ============================================================================
"""
Base contracts for the catalog browser.

These are the values that cross component boundaries:
- Catalog document (geometry / attribute type strings)
- Locator strings (view names)
- Navigation results (Route / NotFound / NoRoute)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# ============================================================================
# CATALOG ENUMS
# ============================================================================

class GeometryType(str, Enum):
    """
    Geometry of a dataset layer.

    Catalog documents are inconsistent about casing and about
    POLYLINE vs LINE, so parsing is lenient.
    """
    POINT = "POINT"
    MULTIPOINT = "MULTIPOINT"
    POLYLINE = "POLYLINE"
    LINE = "LINE"
    POLYGON = "POLYGON"
    TABLE = "TABLE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "GeometryType":
        """Parse a raw geometry string, falling back to UNKNOWN."""
        normalized = (value or "").strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN

    def icon(self) -> str:
        """Glyph shown beside the dataset title."""
        if self in (GeometryType.POINT, GeometryType.MULTIPOINT):
            return "•"
        if self in (GeometryType.POLYLINE, GeometryType.LINE):
            return "〰"
        if self == GeometryType.POLYGON:
            return "⬛"
        if self == GeometryType.TABLE:
            return "▦"
        return ""


class AttributeType(str, Enum):
    """Declared type of an attribute (field)."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUMERATED = "enumerated"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AttributeType":
        """Parse a raw type string, falling back to UNKNOWN."""
        normalized = (value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


class ViewKind(str, Enum):
    """The two tabs of the browser; also the locator keys."""
    DATASET = "dataset"
    ATTRIBUTE = "attribute"

    @property
    def tab(self) -> str:
        """Tab name shown in the UI."""
        return "datasets" if self == ViewKind.DATASET else "attributes"


class CatalogShape(str, Enum):
    """
    Shape of the source document.

    NORMALIZED: {"datasets": [...], "attributes": [...]} linked by attribute_ids
    EMBEDDED:   [...] or {"datasets": [...]} with attributes inline per dataset
    """
    NORMALIZED = "normalized"
    EMBEDDED = "embedded"


class FocusPolicy(str, Enum):
    """What gets focused on cold start when no locator is supplied."""
    NONE = "none"
    FIRST = "first"


# ============================================================================
# NAVIGATION RESULTS
# ============================================================================

@dataclass(frozen=True)
class Route:
    """A locator that resolved to an existing entity."""
    view: ViewKind
    entity_id: str


@dataclass(frozen=True)
class NotFound:
    """A well-formed locator whose entity is not in the catalog."""
    view: ViewKind
    entity_id: str

    @property
    def message(self) -> str:
        kind = "Dataset" if self.view == ViewKind.DATASET else "Attribute"
        return f"{kind} not found: {self.entity_id}"

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class NoRoute:
    """An empty or malformed locator."""
    locator: str = ""

    def __bool__(self) -> bool:
        return False


Resolution = Union[Route, NotFound, NoRoute]


__all__ = [
    "GeometryType",
    "AttributeType",
    "ViewKind",
    "CatalogShape",
    "FocusPolicy",
    "Route",
    "NotFound",
    "NoRoute",
    "Resolution",
]
