# ============================================================================
# VERSION - PUBLIC LANDS DATA CATALOG
# ============================================================================
# STATUS: Release metadata
# ============================================================================
"""
Version information for the Public Lands Data Catalog browser.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
# Criteria for 0.3 - both catalog shapes and deep links work
__version__ = "0.3.1"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"

CODENAME = "Catalog Browser"
