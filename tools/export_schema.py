#!/usr/bin/env python3
# ============================================================================
# CLI SCHEMA EXPORT TOOL
# ============================================================================
# STATUS: Tool - Export arcpy schema scripts without running the server
# PURPOSE: Write <dataset_id>_schema_arcpy.py for one or more datasets
# ============================================================================
"""
Export ArcGIS schema scripts straight from a catalog document.

Loads the catalog the same way the web app does (URL or file), then
writes one arcpy script per requested dataset.

Usage:
    # One dataset, catalog from CATALOG_LOCATION
    python tools/export_schema.py roads

    # Several datasets into a folder
    python tools/export_schema.py roads trails --output-dir ./schemas

    # Explicit catalog location
    python tools/export_schema.py roads --catalog https://example.org/catalog.json

    # What can be exported
    python tools/export_schema.py --list
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_config
from core.errors import CatalogError
from core.logging import ComponentType, get_logger
from infrastructure.catalog_source import create_catalog_source
from services.catalog_store import CatalogStore
from services.schema_export import build_arcgis_schema_script, schema_filename

logger = get_logger(__name__, ComponentType.TOOL)


async def open_store(location: str, timeout: float) -> CatalogStore:
    """Create a store for the location and load it."""
    store = CatalogStore(create_catalog_source(location, timeout))
    await store.load()
    return store


def export_schemas(store: CatalogStore, dataset_ids: List[str], output_dir: Path) -> List[Path]:
    """
    Write a schema script per dataset id.

    Raises:
        KeyError: A dataset id is not in the catalog.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for dataset_id in dataset_ids:
        dataset = store.get_dataset_by_id(dataset_id)
        if dataset is None:
            raise KeyError(f"Dataset not found: {dataset_id}")
        script = build_arcgis_schema_script(dataset, store.get_attributes_for_dataset(dataset))
        path = output_dir / schema_filename(dataset)
        path.write_text(script, encoding="utf-8")
        logger.info(f"Wrote schema script for dataset {dataset_id}", extra={"path": str(path)})
        written.append(path)
    return written


def main(argv=None):
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Export arcpy schema scripts for catalog datasets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s roads
  %(prog)s roads trails --output-dir ./schemas
  %(prog)s --list --catalog data/catalog.json
        """,
    )
    parser.add_argument("dataset_ids", nargs="*", help="Dataset IDs to export")
    parser.add_argument(
        "--catalog", "-c",
        default=config.catalog_location,
        help=f"Catalog URL or path (default: {config.catalog_location})",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        help="Directory for the generated scripts (default: current directory)",
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List dataset IDs and exit",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=config.fetch_timeout_seconds,
        help="Fetch timeout in seconds",
    )

    args = parser.parse_args(argv)

    if not args.list and not args.dataset_ids:
        parser.error("give at least one dataset ID, or --list")

    try:
        store = asyncio.run(open_store(args.catalog, args.timeout))
    except CatalogError as e:
        print(f"ERROR: Error loading catalog: {e}", file=sys.stderr)
        return 1

    if args.list:
        for ds in store.datasets:
            print(f"  {ds.id:30s} {ds.display_name}")
        return 0

    try:
        paths = export_schemas(store, args.dataset_ids, Path(args.output_dir))
    except KeyError as e:
        print(f"ERROR: {e.args[0]}", file=sys.stderr)
        return 1

    for path in paths:
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
