# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the catalog browser. Models are frozen: the
catalog is immutable once loaded.
"""

from core.models.attribute import Attribute, CodedValue
from core.models.dataset import Dataset, Distribution, MetadataReference
from core.models.catalog import Catalog, NormalizedCatalog, EmbeddedCatalog

__all__ = [
    # Attribute
    "Attribute",
    "CodedValue",
    # Dataset
    "Dataset",
    "Distribution",
    "MetadataReference",
    # Catalog
    "Catalog",
    "NormalizedCatalog",
    "EmbeddedCatalog",
]
