"""
Unit tests for SLA breach counting over ordered check timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from freshness_warden.freshness import count_breaches

T = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def _at(*hours: float) -> list[datetime]:
    return [T + timedelta(hours=h) for h in hours]


@pytest.mark.parametrize("checks", [[], _at(0)])
def test_fewer_than_two_checks_returns_zero(checks: list[datetime]) -> None:
    assert count_breaches(checks, 12) == 0
    assert count_breaches(checks, 0) == 0


def test_counts_gap_over_sla() -> None:
    """Only the 6h -> 20h gap (14h) exceeds 12h; 20h -> 29h (9h) does not."""
    assert count_breaches(_at(0, 6, 20, 29), 12) == 1


def test_gap_equal_to_sla_is_not_a_breach() -> None:
    assert count_breaches(_at(0, 8, 16), 8) == 0


def test_all_gaps_below_sla_returns_zero() -> None:
    checks = _at(0, 1, 2, 5, 9)
    for sla in (4, 10, 100):
        assert count_breaches(checks, sla) == 0


def test_non_decreasing_as_sla_shrinks() -> None:
    checks = _at(0, 1, 3, 7, 15, 31)
    counts = [count_breaches(checks, sla) for sla in (20, 10, 5, 2, 1, 0)]
    assert counts == sorted(counts)
    assert counts[0] == 0
    assert counts[-1] == 5


def test_does_not_sort_input() -> None:
    """Unordered input yields negative gaps, which never count; ordering is the caller's job."""
    unordered = _at(29, 20, 6, 0)
    assert count_breaches(unordered, 12) == 0
    assert count_breaches(sorted(unordered), 12) == 1
