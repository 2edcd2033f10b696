"""Staleness predicate. Pure; `now` is always supplied by the caller."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

SECONDS_PER_HOUR = 3600


def hours_between(earlier: datetime, later: datetime) -> float:
    """Elapsed hours from earlier to later (negative if later precedes earlier)."""
    return (later - earlier).total_seconds() / SECONDS_PER_HOUR


def is_stale(last_checked_at: Optional[datetime], sla_hours: int, now: datetime) -> bool:
    """
    A never-checked source is stale. Otherwise stale iff the age exceeds sla_hours;
    an age exactly equal to the SLA is still fresh.
    """
    if last_checked_at is None:
        return True
    return hours_between(last_checked_at, now) > sla_hours
