# ============================================================================
# CATALOG BROWSER - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Wire the catalog store into the JSON API and the HTML UI
# ============================================================================
"""
Catalog Browser Main Application

FastAPI application that:
1. Creates the catalog store for the configured location
2. Warms it at startup (a failure is logged; requests retry the load)
3. Serves the JSON API under /api/v1 and the browser UI under /ui

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from __version__ import __version__, BUILD_DATE
from api.routes import router, health_router, set_catalog_services
from api.ui_routes import router as ui_router
from core.config import get_config
from core.errors import CatalogError
from core.logging import configure_logging, get_logger
from infrastructure.catalog_source import create_catalog_source
from services.catalog_store import CatalogStore

config = get_config()
configure_logging(level=config.log_level, json_output=config.log_format == "json")
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates the store on startup. The catalog is loaded at most once per
    process; a failed warm-up leaves it unloaded so the first request retries.
    """
    logger.info(f"Starting Catalog Browser v{__version__} (Build {BUILD_DATE})")

    store = CatalogStore(create_catalog_source(config.catalog_location, config.fetch_timeout_seconds))
    set_catalog_services(store)

    try:
        await store.load()
        logger.info(f"Catalog ready: {len(store.datasets)} datasets, {len(store.attributes)} attributes")
    except CatalogError as e:
        logger.warning(f"Catalog warm-up failed, will retry on first request: {e}")

    yield

    logger.info("Catalog Browser stopped")


# Create FastAPI app
app = FastAPI(
    title="Public Lands Data Catalog",
    description="Browse datasets and attributes of the lands data catalog",
    version=__version__,
    lifespan=lifespan,
)

# Health route (no prefix)
app.include_router(health_router)

# Include API routes
app.include_router(router, prefix="/api/v1")

# Include UI routes
app.include_router(ui_router)


@app.get("/", include_in_schema=False)
async def root():
    """Send browsers to the catalog UI."""
    return RedirectResponse(url="/ui/")


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
