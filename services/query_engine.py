# ============================================================================
# QUERY ENGINE
# ============================================================================
# STATUS: Core - Free-text and facet filtering
# PURPOSE: Stable substring filtering over datasets and attributes
# ============================================================================
"""
Query Engine

Filtering is plain case-insensitive substring containment over a
space-joined "haystack" of the entity's id, title/label, description,
topics and keywords. No tokenizing, stemming or ranking: matches keep
their original relative order.
"""

from typing import Iterable, List, Optional, Sequence

from core.models import Attribute, Dataset


def _haystack(parts: Iterable[Optional[str]]) -> str:
    return " ".join(p for p in parts if p).lower()


def dataset_search_text(dataset: Dataset) -> str:
    """Lowercased searchable text of a dataset."""
    return _haystack([
        dataset.id,
        dataset.title,
        dataset.description,
        *dataset.topics,
        *dataset.keywords,
    ])


def attribute_search_text(attribute: Attribute) -> str:
    """Lowercased searchable text of an attribute."""
    return _haystack([attribute.key, attribute.label, attribute.description])


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def filter_datasets(
    datasets: Sequence[Dataset],
    query: Optional[str] = "",
    topic: Optional[str] = None,
) -> List[Dataset]:
    """
    Datasets matching the text query AND the topic facet.

    An empty or whitespace-only query matches everything; an empty
    topic applies no facet.
    """
    needle = normalize_query(query)
    return [
        ds for ds in datasets
        if (not topic or topic in ds.topics)
        and (not needle or needle in dataset_search_text(ds))
    ]


def filter_attributes(
    attributes: Sequence[Attribute],
    query: Optional[str] = "",
) -> List[Attribute]:
    """Attributes whose key, label or description contain the query."""
    needle = normalize_query(query)
    if not needle:
        return list(attributes)
    return [attr for attr in attributes if needle in attribute_search_text(attr)]


def collect_topics(datasets: Iterable[Dataset]) -> List[str]:
    """Distinct topics across datasets, in first-seen order."""
    topics: List[str] = []
    seen = set()
    for ds in datasets:
        for topic in ds.topics:
            if topic not in seen:
                seen.add(topic)
                topics.append(topic)
    return topics


__all__ = [
    "dataset_search_text",
    "attribute_search_text",
    "normalize_query",
    "filter_datasets",
    "filter_attributes",
    "collect_topics",
]
