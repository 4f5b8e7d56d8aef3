# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Core - FastAPI routes
# PURPOSE: JSON API and HTML UI for browsing the catalog
# ============================================================================
"""
API Module

FastAPI routes for the catalog browser.
"""

from .routes import router, health_router, set_catalog_services, get_catalog_store
from .schemas import (
    AttributeSummary,
    DatasetSummary,
    HealthResponse,
    ResolveResponse,
)

__all__ = [
    "router",
    "health_router",
    "set_catalog_services",
    "get_catalog_store",
    "AttributeSummary",
    "DatasetSummary",
    "HealthResponse",
    "ResolveResponse",
]
