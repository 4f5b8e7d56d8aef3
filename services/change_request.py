# ============================================================================
# CHANGE REQUEST LINKS
# ============================================================================
# STATUS: Collaborator - Issue tracker URL builder
# PURPOSE: Pre-filled "suggest a change" issue links for catalog entries
# ============================================================================
"""
Change Request Links

Builds a "new issue" URL whose title names the entry and whose body
embeds the entry's current JSON in a fenced block. Pure string
construction; nothing is sent anywhere.
"""

import json
from typing import Optional, Union
from urllib.parse import quote

from core.config import get_config
from core.contracts import ViewKind
from core.models import Attribute, Dataset

# Same unescaped set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def entity_json(entity: Union[Dataset, Attribute]) -> str:
    """The record as it appeared in the catalog, pretty-printed."""
    payload = entity.model_dump(mode="json", exclude_unset=True)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def build_issue_body(kind: ViewKind, entity_id: str, name: str, record_json: str) -> str:
    return "\n".join([
        f"Please describe the requested change for {kind.value} `{entity_id}` (`{name}`).",
        "",
        "---",
        "",
        f"Current {kind.value} JSON:",
        "```json",
        record_json,
        "```",
    ])


def build_issue_url(
    kind: ViewKind,
    entity_id: str,
    name: str,
    record_json: str,
    base_url: Optional[str] = None,
) -> str:
    base = base_url or get_config().issue_url
    title = encode_uri_component(f"{kind.value.capitalize()} change request: {entity_id}")
    body = encode_uri_component(build_issue_body(kind, entity_id, name, record_json))
    return f"{base}?title={title}&body={body}"


def issue_url_for_dataset(dataset: Dataset, base_url: Optional[str] = None) -> str:
    """Issue link titled "Dataset change request: <id>"."""
    return build_issue_url(
        ViewKind.DATASET,
        dataset.id or "",
        dataset.title or "",
        entity_json(dataset),
        base_url,
    )


def issue_url_for_attribute(attribute: Attribute, base_url: Optional[str] = None) -> str:
    """Issue link titled "Attribute change request: <key>"."""
    return build_issue_url(
        ViewKind.ATTRIBUTE,
        attribute.key or "",
        attribute.label or "",
        entity_json(attribute),
        base_url,
    )


__all__ = [
    "encode_uri_component",
    "entity_json",
    "build_issue_body",
    "build_issue_url",
    "issue_url_for_dataset",
    "issue_url_for_attribute",
]
