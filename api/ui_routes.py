"""
UI Routes - Jinja2 template rendering for the catalog browser.

One page, two tabs (Datasets / Attributes). Focus comes from the
`locator` query parameter, which the page's script fills in from the URL
fragment (`#dataset=roads`), so shared links work without client-side
rendering.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from __version__ import __version__
from core.config import get_config
from core.contracts import NotFound, ViewKind
from core.errors import CatalogError
from core.logging import ComponentType, get_logger, log_context
from core.models import Attribute, Dataset
from services.catalog_store import CatalogStore
from services.change_request import issue_url_for_attribute, issue_url_for_dataset
from services.navigation import InMemoryHistory, NavigationState, Navigator, encode_locator
from services.query_engine import filter_attributes, filter_datasets
from .routes import get_catalog_store, schema_path

logger = get_logger(__name__, ComponentType.UI)

router = APIRouter(prefix="/ui", tags=["ui"])


def _templates_dir() -> Path:
    configured = Path(get_config().templates_dir)
    if configured.is_absolute():
        return configured
    return Path(__file__).resolve().parent.parent / configured


templates = Jinja2Templates(directory=str(_templates_dir()))


# ============================================================================
# HELPERS
# ============================================================================

def get_base_context(request: Request, search: Dict[str, str]) -> dict:
    """Build base context for all templates."""

    def page_url(**overrides: Optional[str]) -> str:
        params = {**search, **overrides}
        query = urlencode({k: v for k, v in params.items() if v})
        return f"{request.url.path}?{query}" if query else request.url.path

    return {
        "request": request,
        "version": __version__,
        "search": search,
        "page_url": page_url,
        "dataset_locator": lambda ds_id: encode_locator(ViewKind.DATASET, ds_id),
        "attribute_locator": lambda key: encode_locator(ViewKind.ATTRIBUTE, key),
        "load_error": None,
    }


def attribute_panel(store: CatalogStore, attribute: Attribute) -> Dict[str, Any]:
    """Everything the attribute detail (full or inline) shows."""
    return {
        "attribute": attribute,
        "coded_values": attribute.coded_values,
        "datasets": store.get_datasets_for_attribute(attribute.key),
        "issue_url": issue_url_for_attribute(attribute),
    }


def dataset_panel(store: CatalogStore, dataset: Dataset, inline_key: Optional[str]) -> Dict[str, Any]:
    """Everything the dataset detail shows, with an optional inline attribute."""
    panel: Dict[str, Any] = {
        "dataset": dataset,
        "geometry_icon": dataset.geometry.icon(),
        "attributes": store.get_attributes_for_dataset(dataset),
        "issue_url": issue_url_for_dataset(dataset),
        "schema_url": schema_path(dataset.id or ""),
        "inline": None,
        "inline_missing": None,
    }
    if inline_key:
        attribute = store.get_attribute_by_id(inline_key)
        if attribute is None:
            panel["inline_missing"] = f"Attribute not found: {inline_key}"
        else:
            panel["inline"] = attribute_panel(store, attribute)
    return panel


def detail_panels(
    store: CatalogStore,
    state: NavigationState,
    inline_key: Optional[str],
) -> Dict[str, Any]:
    """Detail context for both tabs; each tab keeps its own focus."""
    dataset = store.get_dataset_by_id(state.dataset_id)
    attribute = store.get_attribute_by_id(state.attribute_id)
    not_found: Optional[NotFound] = state.not_found
    return {
        "dataset_detail": dataset_panel(store, dataset, inline_key) if dataset else None,
        "attribute_detail": attribute_panel(store, attribute) if attribute else None,
        "not_found": not_found.message if not_found is not None else None,
        "not_found_view": not_found.view.value if not_found is not None else None,
    }


# ============================================================================
# ROUTES
# ============================================================================

@router.get("/", response_class=HTMLResponse)
async def catalog_page(
    request: Request,
    locator: str = Query("", description="Deep link, e.g. dataset=roads"),
    view: Optional[ViewKind] = Query(None, description="Tab to show when no locator is given"),
    q: str = Query("", description="Dataset search"),
    topic: str = Query("", description="Dataset topic facet"),
    aq: str = Query("", description="Attribute search"),
    inline: Optional[str] = Query(None, description="Attribute previewed inside the dataset"),
):
    """Render the two-tab catalog browser."""
    search = {"q": q, "topic": topic, "aq": aq}
    context = get_base_context(request, search)
    store = get_catalog_store()

    try:
        await store.load()
    except CatalogError as e:
        logger.warning(f"Catalog unavailable for UI: {e}")
        context["load_error"] = "Error loading catalog."
        context["load_error_detail"] = str(e)
        return templates.TemplateResponse(request, "catalog.html", context)

    navigator = Navigator(
        store,
        history=InMemoryHistory(base_url=request.url.path, initial_locator=locator),
        focus_policy=get_config().focus_policy,
    )
    with log_context(view=view.value if view else None, request_id=request.headers.get("x-request-id")):
        navigator.start(locator)
        if view is not None and not locator:
            navigator.show_view(view)

    datasets: List[Dataset] = filter_datasets(store.datasets, q, topic or None)
    attributes: List[Attribute] = filter_attributes(store.attributes, aq)

    context.update({
        "state": navigator.state,
        "share_locator": navigator.history.locator,
        "active_tab": navigator.state.active_view.tab,
        "datasets": datasets,
        "attributes": attributes,
        "topics": store.topics,
        "inline_key": inline,
    })
    context.update(detail_panels(store, navigator.state, inline))

    return templates.TemplateResponse(request, "catalog.html", context)
