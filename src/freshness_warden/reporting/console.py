"""
Plain-text renderers for the CLI. Each render_* returns the full text (no trailing newline);
input order is kept, so callers pass lists already in name/owner order.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Sequence

from freshness_warden.freshness.model import (
    CheckRecord,
    CheckStatus,
    OwnerHealth,
    OwnerSummary,
    SourceHealth,
    SourceRollup,
    SourceStatus,
    StaleSource,
    SummaryReport,
)


def format_timestamp(value: Optional[datetime], missing: str = "never") -> str:
    """UTC timestamp as 'YYYY-MM-DD HH:MM:SSZ'."""
    if value is None:
        return missing
    return value.strftime("%Y-%m-%d %H:%M:%SZ")


def _status(value: Optional[CheckStatus], missing: str = "none") -> str:
    return value.value if value is not None else missing


def render_stale(sources: Sequence[StaleSource]) -> str:
    if not sources:
        return "No stale sources detected."
    lines = ["Stale sources:"]
    for s in sources:
        lines.append(
            f"- {s.name} (owner: {s.owner}, SLA: {s.sla_hours}h, last: {format_timestamp(s.last_checked_at)})"
        )
    return "\n".join(lines)


def render_summary(report: SummaryReport) -> str:
    lines = [
        f"Summary for last {report.days} days:",
        f"- ok: {report.ok_count}",
        f"- warning: {report.warning_count}",
        f"- failed: {report.failed_count}",
        f"- stale sources: {len(report.stale_sources)}",
    ]
    for s in report.stale_sources:
        lines.append(f"  - {s.name} (owner: {s.owner}, last: {format_timestamp(s.last_checked_at)})")
    return "\n".join(lines)


def render_rollup(rollups: Sequence[SourceRollup]) -> str:
    if not rollups:
        return "No sources registered."
    lines = ["Source rollup:"]
    for r in rollups:
        stale_label = "stale" if r.is_stale else "fresh"
        lines.append(f"- {r.name} ({r.owner}, SLA: {r.sla_hours}h)")
        lines.append(
            f"  last: {format_timestamp(r.last_checked_at)} | status: {_status(r.last_status, 'n/a')}"
            f" | next due: {format_timestamp(r.next_due_at, 'n/a')} | {stale_label}"
        )
        if r.last_details and r.last_details.strip():
            lines.append(f"  details: {r.last_details}")
    return "\n".join(lines)


def render_history(source_name: str, history: Sequence[CheckRecord]) -> str:
    lines = [f"Recent checks for {source_name}:"]
    if not history:
        lines.append("  (no checks yet)")
        return "\n".join(lines)
    for entry in history:
        details = f" | {entry.details}" if entry.details and entry.details.strip() else ""
        lines.append(f"- {format_timestamp(entry.checked_at)} | {entry.status.value}{details}")
    return "\n".join(lines)


def render_status(statuses: Sequence[SourceStatus]) -> str:
    if not statuses:
        return "No sources found."
    lines = ["Source status:"]
    for s in statuses:
        lines.append(
            f"- {s.name} (owner: {s.owner}, SLA: {s.sla_hours}h, "
            f"last: {format_timestamp(s.last_checked_at)}, status: {_status(s.last_status)})"
        )
    return "\n".join(lines)


def render_source_health(health: Sequence[SourceHealth], days: int) -> str:
    if not health:
        return "No sources registered."
    lines = [f"Source health for last {days} days:"]
    for h in health:
        stale_label = "stale" if h.is_stale else "fresh"
        age = f"{h.hours_since_last}h" if h.hours_since_last is not None else "n/a"
        lines.append(f"- {h.name} ({h.owner}, SLA: {h.sla_hours}h, {stale_label})")
        lines.append(
            f"  last: {format_timestamp(h.last_checked_at)} | status: {_status(h.last_status)} | age: {age}"
        )
        lines.append(
            f"  checks: {h.total_checks} (ok {h.ok_count}, warning {h.warning_count}, "
            f"failed {h.failed_count}) | breaches: {h.breach_count}"
        )
    return "\n".join(lines)


def render_owner_summary(summaries: Sequence[OwnerSummary], days: int) -> str:
    if not summaries:
        return "No owners registered."
    lines = [f"Owner summary for last {days} days:"]
    for s in summaries:
        lines.append(f"- {s.owner} (sources: {s.total_sources}, stale: {s.stale_sources})")
        lines.append(
            f"  checks: ok {s.ok_count}, warning {s.warning_count}, failed {s.failed_count}"
            f" | latest: {format_timestamp(s.latest_check_at)}"
        )
    return "\n".join(lines)


def render_owner_health(owners: Sequence[OwnerHealth], days: int) -> str:
    if not owners:
        return "No owners registered."
    lines = [f"Owner health for last {days} days:"]
    for o in owners:
        lines.append(f"- {o.owner} (sources: {o.source_count}, stale: {o.stale_count})")
        lines.append(
            f"  last: {format_timestamp(o.last_checked_at)} | status: {_status(o.last_status)}"
            f" | breaches: {o.breach_count}"
        )
        lines.append(
            f"  checks: {o.total_checks} (ok {o.ok_count}, warning {o.warning_count}, failed {o.failed_count})"
        )
    return "\n".join(lines)


def render_json(payload: Any) -> str:
    """JSON for --json output. Accepts a model, a list of models, or plain data."""
    if isinstance(payload, (list, tuple)):
        data: Any = [_plain(item) for item in payload]
    else:
        data = _plain(payload)
    return json.dumps(data, indent=2, default=str)


def _plain(item: Any) -> Any:
    to_dict = getattr(item, "to_dict", None)
    return to_dict() if callable(to_dict) else item

