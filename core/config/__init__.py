# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the catalog browser.
"""

from core.config.defaults import (
    CatalogConfig,
    DEFAULT_CATALOG_LOCATION,
    DEFAULT_ISSUE_URL,
    get_config,
    reset_config,
)

__all__ = [
    "CatalogConfig",
    "DEFAULT_CATALOG_LOCATION",
    "DEFAULT_ISSUE_URL",
    "get_config",
    "reset_config",
]
