# ============================================================================
# CATALOG DOCUMENT MODEL
# ============================================================================
# STATUS: Domain model - Tagged union over the two document shapes
# PURPOSE: Canonical in-memory catalog produced once at load time
# ============================================================================
"""
Catalog Document Model

Two document shapes exist in the wild:

    Normalized:  {"datasets": [...], "attributes": [...]}
                 datasets reference attributes via attribute_ids

    Embedded:    [...]  or  {"datasets": [...]}
                 each dataset embeds its own attribute records

The loader resolves the shape once (services.index_builder.parse_catalog_document)
and produces one of the models below. Downstream code reads `shape` only
through the index builder.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from core.contracts import CatalogShape
from core.models.attribute import Attribute
from core.models.dataset import Dataset


class NormalizedCatalog(BaseModel):
    """Datasets and attributes as separate, FK-linked collections."""

    shape: Literal[CatalogShape.NORMALIZED] = CatalogShape.NORMALIZED
    datasets: List[Dataset] = Field(default_factory=list)
    attributes: List[Attribute] = Field(default_factory=list)

    model_config = {"frozen": True}


class EmbeddedCatalog(BaseModel):
    """Datasets carrying their attribute records inline."""

    shape: Literal[CatalogShape.EMBEDDED] = CatalogShape.EMBEDDED
    datasets: List[Dataset] = Field(default_factory=list)

    model_config = {"frozen": True}


Catalog = Annotated[
    Union[NormalizedCatalog, EmbeddedCatalog],
    Field(discriminator="shape"),
]


__all__ = ["NormalizedCatalog", "EmbeddedCatalog", "Catalog"]
