# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for catalog location, links, focus policy
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for the catalog browser.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass
from typing import Optional

from core.contracts import FocusPolicy


DEFAULT_CATALOG_LOCATION = "data/catalog.json"
DEFAULT_ISSUE_URL = (
    "https://github.com/AmateurProjects/Public-Lands-Data-Catalog/issues/new"
)


@dataclass(frozen=True)
class CatalogConfig:
    """
    Runtime configuration for the catalog browser.

    catalog_location may be an http(s) URL or a filesystem path.
    """
    catalog_location: str = DEFAULT_CATALOG_LOCATION
    fetch_timeout_seconds: float = 30.0

    # "Suggest a change" links
    issue_url: str = DEFAULT_ISSUE_URL

    # Cold-start selection when no locator is supplied
    focus_policy: FocusPolicy = FocusPolicy.NONE

    # Presentation
    templates_dir: str = "templates"

    # Logging
    log_level: str = "INFO"
    log_format: str = "human"

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """
        Load configuration from environment variables.

            CATALOG_LOCATION:      URL or path of catalog.json
            CATALOG_FETCH_TIMEOUT: Fetch timeout in seconds
            CATALOG_ISSUE_URL:     Issue tracker "new issue" URL
            CATALOG_FOCUS_POLICY:  "none" or "first"
            CATALOG_TEMPLATES_DIR: Jinja2 templates directory
            LOG_LEVEL / LOG_FORMAT
        """
        policy_raw = os.environ.get("CATALOG_FOCUS_POLICY", FocusPolicy.NONE.value).lower()
        try:
            policy = FocusPolicy(policy_raw)
        except ValueError:
            raise ValueError(
                f"CATALOG_FOCUS_POLICY must be 'none' or 'first', got '{policy_raw}'"
            )

        return cls(
            catalog_location=os.environ.get("CATALOG_LOCATION", DEFAULT_CATALOG_LOCATION),
            fetch_timeout_seconds=float(os.environ.get("CATALOG_FETCH_TIMEOUT", "30")),
            issue_url=os.environ.get("CATALOG_ISSUE_URL", DEFAULT_ISSUE_URL),
            focus_policy=policy,
            templates_dir=os.environ.get("CATALOG_TEMPLATES_DIR", "templates"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_format=os.environ.get("LOG_FORMAT", "human").lower(),
        )

    @property
    def is_remote(self) -> bool:
        """True if the catalog is fetched over HTTP."""
        return self.catalog_location.startswith(("http://", "https://"))


# ============================================================================
# SINGLETON ACCESS
# ============================================================================

_config: Optional[CatalogConfig] = None


def get_config() -> CatalogConfig:
    """Get the process-wide configuration (loaded once from env)."""
    global _config
    if _config is None:
        _config = CatalogConfig.from_env()
    return _config


def reset_config() -> None:
    """Forget the cached configuration (tests)."""
    global _config
    _config = None
