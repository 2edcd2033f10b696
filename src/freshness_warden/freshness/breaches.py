"""SLA breach counting over a source's check history."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from freshness_warden.freshness.staleness import hours_between


def count_breaches(ordered_checks_utc: Sequence[datetime], sla_hours: int) -> int:
    """
    Count adjacent gaps strictly longer than sla_hours.

    ordered_checks_utc must already be ascending; it is not sorted here, so an
    unordered input from a caller shows up as missing breaches rather than being hidden.
    """
    if len(ordered_checks_utc) < 2:
        return 0
    breaches = 0
    for previous, current in zip(ordered_checks_utc, ordered_checks_utc[1:]):
        if hours_between(previous, current) > sla_hours:
            breaches += 1
    return breaches
