"""
Derived views over the same inputs as source health: summary, owner summary, rollup,
status and stale listing. Pure; ordering is by source name or owner name.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Mapping, Optional, Sequence

from freshness_warden.freshness.model import (
    CheckRecord,
    OwnerHealth,
    OwnerSummary,
    SourceHealth,
    SourceMeta,
    SourceRollup,
    SourceStatus,
    StaleSource,
    SummaryReport,
)
from freshness_warden.freshness.owner_health import owner_key
from freshness_warden.freshness.source_health import latest_check
from freshness_warden.freshness.staleness import is_stale


def _by_name(sources: Iterable[SourceMeta]) -> List[SourceMeta]:
    return sorted(sources, key=lambda s: s.name)


def build_summary(source_health: Sequence[SourceHealth], days: int) -> SummaryReport:
    """Windowed totals are the sums of the per-source tallies."""
    return SummaryReport(
        days=days,
        ok_count=sum(h.ok_count for h in source_health),
        warning_count=sum(h.warning_count for h in source_health),
        failed_count=sum(h.failed_count for h in source_health),
        stale_sources=[
            StaleSource(h.source_id, h.name, h.owner, h.sla_hours, h.last_checked_at)
            for h in sorted(source_health, key=lambda h: h.name)
            if h.is_stale
        ],
    )


def build_owner_summary(owner_health: Iterable[OwnerHealth]) -> List[OwnerSummary]:
    return [
        OwnerSummary(
            owner=o.owner,
            total_sources=o.source_count,
            stale_sources=o.stale_count,
            ok_count=o.ok_count,
            warning_count=o.warning_count,
            failed_count=o.failed_count,
            latest_check_at=o.last_checked_at,
        )
        for o in owner_health
    ]


def next_due_at(last_checked_at: Optional[datetime], sla_hours: int) -> Optional[datetime]:
    if last_checked_at is None:
        return None
    return last_checked_at + timedelta(hours=sla_hours)


def build_rollups(
    sources: Iterable[SourceMeta],
    checks_by_source: Mapping[int, Sequence[CheckRecord]],
    now: datetime,
) -> List[SourceRollup]:
    rollups: List[SourceRollup] = []
    for source in _by_name(sources):
        last = latest_check(checks_by_source.get(source.source_id, ()))
        last_checked_at = last.checked_at if last is not None else None
        rollups.append(
            SourceRollup(
                source_id=source.source_id,
                name=source.name,
                owner=source.owner,
                sla_hours=source.sla_hours,
                last_status=last.status if last is not None else None,
                last_checked_at=last_checked_at,
                last_details=last.details if last is not None else None,
                is_stale=is_stale(last_checked_at, source.sla_hours, now),
                next_due_at=next_due_at(last_checked_at, source.sla_hours),
            )
        )
    return rollups


def build_status(
    sources: Iterable[SourceMeta],
    checks_by_source: Mapping[int, Sequence[CheckRecord]],
    owner: Optional[str] = None,
) -> List[SourceStatus]:
    """Last check per source; `owner` filters case-insensitively."""
    wanted = owner_key(owner) if owner is not None else None
    statuses: List[SourceStatus] = []
    for source in _by_name(sources):
        if wanted is not None and owner_key(source.owner) != wanted:
            continue
        last = latest_check(checks_by_source.get(source.source_id, ()))
        statuses.append(
            SourceStatus(
                source_id=source.source_id,
                name=source.name,
                owner=source.owner,
                sla_hours=source.sla_hours,
                last_checked_at=last.checked_at if last is not None else None,
                last_status=last.status if last is not None else None,
            )
        )
    return statuses


def list_stale_sources(
    sources: Iterable[SourceMeta],
    checks_by_source: Mapping[int, Sequence[CheckRecord]],
    now: datetime,
) -> List[StaleSource]:
    stale: List[StaleSource] = []
    for source in _by_name(sources):
        last = latest_check(checks_by_source.get(source.source_id, ()))
        last_checked_at = last.checked_at if last is not None else None
        if is_stale(last_checked_at, source.sla_hours, now):
            stale.append(
                StaleSource(source.source_id, source.name, source.owner, source.sla_hours, last_checked_at)
            )
    return stale
