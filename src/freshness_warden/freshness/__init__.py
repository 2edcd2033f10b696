"""
Freshness analytics: staleness, SLA breaches, per-source health and per-owner rollups.
No I/O; deterministic given the same inputs and `now`.
"""

from __future__ import annotations

from freshness_warden.freshness.breaches import count_breaches
from freshness_warden.freshness.model import (
    CheckRecord,
    CheckStatus,
    OwnerHealth,
    OwnerSummary,
    SourceHealth,
    SourceMeta,
    SourceRollup,
    SourceStatus,
    StaleSource,
    SummaryReport,
)
from freshness_warden.freshness.owner_health import build_owner_health
from freshness_warden.freshness.source_health import build_source_health
from freshness_warden.freshness.staleness import is_stale
from freshness_warden.freshness.views import (
    build_owner_summary,
    build_rollups,
    build_status,
    build_summary,
    list_stale_sources,
)

__all__ = [
    "CheckRecord",
    "CheckStatus",
    "OwnerHealth",
    "OwnerSummary",
    "SourceHealth",
    "SourceMeta",
    "SourceRollup",
    "SourceStatus",
    "StaleSource",
    "SummaryReport",
    "build_owner_health",
    "build_owner_summary",
    "build_rollups",
    "build_source_health",
    "build_status",
    "build_summary",
    "count_breaches",
    "is_stale",
    "list_stale_sources",
]
