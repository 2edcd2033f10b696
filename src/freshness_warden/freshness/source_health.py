"""
Per-source health from metadata plus check history. Pure; no I/O.

Two windows:
- full history: last check, staleness, breach count (lifetime SLA violations)
- recent window [now - days, now]: ok/warning/failed tallies and total_checks
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Mapping, Optional, Sequence

from freshness_warden.freshness.breaches import count_breaches
from freshness_warden.freshness.model import CheckRecord, CheckStatus, SourceHealth, SourceMeta
from freshness_warden.freshness.staleness import hours_between, is_stale


def _order_key(check: CheckRecord) -> tuple[datetime, int]:
    return (check.checked_at, check.check_id if check.check_id is not None else -1)


def order_history(checks: Iterable[CheckRecord]) -> List[CheckRecord]:
    """
    Ascending by (checked_at, check_id). Stable, so checks without an id keep input order
    among equal timestamps. The last element is the "latest" check.
    """
    return sorted(checks, key=_order_key)


def latest_check(checks: Iterable[CheckRecord]) -> Optional[CheckRecord]:
    ordered = order_history(checks)
    return ordered[-1] if ordered else None


def in_window(check: CheckRecord, now: datetime, days: int) -> bool:
    since = now - timedelta(days=days)
    return since <= check.checked_at <= now


def hours_since(last_checked_at: Optional[datetime], now: datetime) -> Optional[int]:
    if last_checked_at is None:
        return None
    return math.floor(hours_between(last_checked_at, now))


def build_one(
    source: SourceMeta,
    checks: Sequence[CheckRecord],
    now: datetime,
    days: int,
) -> SourceHealth:
    ordered = order_history(checks)
    last = ordered[-1] if ordered else None
    last_checked_at = last.checked_at if last is not None else None

    recent = [c for c in ordered if in_window(c, now, days)]

    return SourceHealth(
        source_id=source.source_id,
        name=source.name,
        owner=source.owner,
        sla_hours=source.sla_hours,
        last_checked_at=last_checked_at,
        hours_since_last=hours_since(last_checked_at, now),
        last_status=last.status if last is not None else None,
        is_stale=is_stale(last_checked_at, source.sla_hours, now),
        ok_count=sum(1 for c in recent if c.status is CheckStatus.OK),
        warning_count=sum(1 for c in recent if c.status is CheckStatus.WARNING),
        failed_count=sum(1 for c in recent if c.status is CheckStatus.FAILED),
        breach_count=count_breaches([c.checked_at for c in ordered], source.sla_hours),
        total_checks=len(recent),
    )


def build_source_health(
    sources: Iterable[SourceMeta],
    checks_by_source: Mapping[int, Sequence[CheckRecord]],
    now: datetime,
    days: int,
) -> List[SourceHealth]:
    """
    One SourceHealth per source, ordered by name (case-sensitive ascending).
    Sources missing from checks_by_source are treated as never checked.
    """
    results = [
        build_one(source, checks_by_source.get(source.source_id, ()), now, days)
        for source in sources
    ]
    results.sort(key=lambda h: h.name)
    return results
