# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors and models
# ============================================================================

from core.contracts import (
    AttributeType,
    CatalogShape,
    FocusPolicy,
    GeometryType,
    NoRoute,
    NotFound,
    Route,
    ViewKind,
)
from core.errors import CatalogError, CatalogNotLoadedError, FormatError, LoadError
from core.models import (
    Attribute,
    Catalog,
    CodedValue,
    Dataset,
    EmbeddedCatalog,
    NormalizedCatalog,
)

__all__ = [
    # Enums
    "AttributeType",
    "CatalogShape",
    "FocusPolicy",
    "GeometryType",
    "ViewKind",
    # Navigation results
    "Route",
    "NotFound",
    "NoRoute",
    # Errors
    "CatalogError",
    "CatalogNotLoadedError",
    "FormatError",
    "LoadError",
    # Models
    "Attribute",
    "Catalog",
    "CodedValue",
    "Dataset",
    "EmbeddedCatalog",
    "NormalizedCatalog",
]
