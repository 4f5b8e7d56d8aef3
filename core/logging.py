# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Context-aware logging for store, index, navigation and web
# PURPOSE: One log format for the server and the CLI tools
# ============================================================================
"""
Structured Logging

Every logger comes from get_logger() and is tagged with a component.
Fields set with log_context() (catalog source, focused dataset/attribute,
view, request id) are attached to each record emitted inside the block.

Two output formats, picked by configure_logging():

    human (default)   2026-10-18 09:00:00 INFO     services.catalog_store [view=dataset]: ...
    json              {"timestamp": ..., "level": ..., "context": {...}, ...}

Usage:
    from core.logging import ComponentType, get_logger, log_context

    logger = get_logger(__name__, ComponentType.STORE)

    with log_context(catalog_source="data/catalog.json", operation="load"):
        logger.info("Loading catalog")
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ComponentType(str, Enum):
    """Where a log line comes from."""
    STORE = "store"
    INDEX = "index"
    NAVIGATION = "navigation"
    API = "api"
    UI = "ui"
    INFRASTRUCTURE = "infrastructure"
    TOOL = "tool"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class LogContext:
    """Fields attached to every record logged inside a log_context() block."""
    catalog_source: Optional[str] = None
    dataset_id: Optional[str] = None
    attribute_key: Optional[str] = None
    view: Optional[str] = None
    request_id: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only; `extra` is flattened in."""
        result = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not None
        }
        result.update(self.extra)
        return result


# One context per asyncio task / thread
_current: ContextVar[LogContext] = ContextVar("catalog_log_context", default=LogContext())


def get_current_context() -> LogContext:
    return _current.get()


@contextmanager
def log_context(extra: Optional[Dict[str, Any]] = None, **values):
    """
    Layer fields over the current context for the duration of the block.

    None values are ignored, so callers can pass optional ids straight in.

    Example:
        with log_context(dataset_id="roads", view="dataset"):
            logger.info("Rendering dataset")
    """
    parent = _current.get()
    updates = {k: v for k, v in values.items() if v is not None}
    merged_extra = {**parent.extra, **(extra or {})}
    token = _current.set(replace(parent, extra=merged_extra, **updates))
    try:
        yield _current.get()
    finally:
        _current.reset(token)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ============================================================================
# FORMATTERS
# ============================================================================

class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            payload["context"] = context

        data = getattr(record, "data", None)
        if data:
            payload["data"] = data

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload["source"] = f"{record.filename}:{record.lineno}"
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line format for terminals."""

    # Context fields worth showing inline; the rest stays in JSON output
    INLINE_FIELDS = ("dataset_id", "attribute_key", "view", "operation")

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        context = get_current_context()

        shown = [
            f"{name.split('_')[0]}={getattr(context, name)}"
            for name in self.INLINE_FIELDS
            if getattr(context, name)
        ]
        where = f" [{', '.join(shown)}]" if shown else ""

        line = f"{stamp} {record.levelname:<8} {record.name}{where}: {record.getMessage()}"

        data = getattr(record, "data", None)
        if data:
            line += f" {data}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ============================================================================
# LOGGERS
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter carrying a component tag.

    Keyword `extra` values end up under record.data, next to the component.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.pop("extra", None) or {})
        component = self.extra.get("component")
        if component is not None:
            data.setdefault("component", component.value)
        kwargs["extra"] = {"data": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger, e.g. get_logger(__name__, ComponentType.INDEX)."""
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Install a single stdout handler on the root logger.

    JSON output is used when asked for or when LOG_FORMAT=json.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    use_json = json_output or os.getenv("LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if use_json else HumanFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


# ============================================================================
# CHECKPOINTS
# ============================================================================

def log_checkpoint(name: str, data: Optional[Dict[str, Any]] = None) -> None:
    """
    Log a named milestone ("catalog_loaded").

    Always emitted at INFO on the "checkpoint" logger so milestones can be
    filtered out of the rest of the stream.
    """
    payload: Dict[str, Any] = {"checkpoint": name}
    source = get_current_context().catalog_source
    if source:
        payload["catalog_source"] = source
    if data:
        payload.update(data)
    logging.getLogger("checkpoint").info(f"CHECKPOINT: {name}", extra={"data": payload})


__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
