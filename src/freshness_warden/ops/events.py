"""
Structured ops events for source mutations and computed health views.
Log-level + structured event dict; keys are emitted in sorted order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

OPS_LOGGER_NAME = "freshness_warden.ops_events"


def _logger() -> logging.Logger:
    return logging.getLogger(OPS_LOGGER_NAME)


def _event(event_type: str, **kwargs: Any) -> None:
    """Emit a structured ops event (deterministic key order)."""
    msg = f"ops_event={event_type} " + " ".join(f"{k}={v!r}" for k, v in sorted(kwargs.items()))
    _logger().info(msg, extra={"ops_event_type": event_type, "ops_event": {**kwargs}})


def log_source_added(name: str, owner: str, sla_hours: int, created: bool) -> None:
    """created=False means the name already existed and nothing was written."""
    _event("source_added", name=name, owner=owner, sla_hours=sla_hours, created=created)


def log_source_updated(name: str, fields: Dict[str, Any], found: bool) -> None:
    _event("source_updated", name=name, fields=sorted(fields), found=found)


def log_source_removed(name: str, removed: bool) -> None:
    _event("source_removed", name=name, removed=removed)


def log_check_logged(source_name: str, status: str) -> None:
    _event("check_logged", source=source_name, status=status)


def log_health_computed(view: str, days: int | None, rows: int, stale: int) -> None:
    """Counts only; never per-source detail."""
    payload: Dict[str, Any] = {"view": view, "rows": rows, "stale": stale}
    if days is not None:
        payload["days"] = days
    _event("health_computed", **payload)
