"""
Unit tests for derived views: summary, owner summary, rollup, status and stale listing.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from freshness_warden.freshness import (
    CheckRecord,
    CheckStatus,
    SourceMeta,
    build_owner_health,
    build_owner_summary,
    build_rollups,
    build_source_health,
    build_status,
    build_summary,
    list_stale_sources,
)

NOW = datetime(2026, 4, 1, 0, 0, 0, tzinfo=timezone.utc)

SOURCES = [
    SourceMeta(1, "Scholar Application Export", "Scholar Ops", 24),
    SourceMeta(2, "Award Disbursement Feed", "Finance", 12),
    SourceMeta(3, "Mentor Availability Sheet", "scholar ops", 72),
    SourceMeta(4, "Prospect Feed", "Pipeline", 24),
]

CHECKS = {
    1: [
        CheckRecord(NOW - timedelta(hours=50), CheckStatus.OK, "late", 1),
        CheckRecord(NOW - timedelta(hours=3), CheckStatus.OK, "Export landed on time.", 4),
    ],
    2: [
        CheckRecord(NOW - timedelta(hours=20), CheckStatus.FAILED, "No feed received in 24 hours.", 2),
    ],
    3: [
        CheckRecord(NOW - timedelta(hours=30), CheckStatus.WARNING, None, 3),
    ],
}


def test_summary_totals_match_source_health() -> None:
    health = build_source_health(SOURCES, CHECKS, NOW, 7)
    report = build_summary(health, 7)
    assert report.days == 7
    assert report.ok_count == sum(h.ok_count for h in health) == 2
    assert report.warning_count == 1
    assert report.failed_count == 1
    assert [s.name for s in report.stale_sources] == ["Award Disbursement Feed", "Prospect Feed"]


def test_owner_summary_projects_owner_health() -> None:
    owners = build_owner_health(build_source_health(SOURCES, CHECKS, NOW, 7))
    summaries = build_owner_summary(owners)
    # "Mentor Availability Sheet" sorts first, so its owner spelling names the group.
    assert [s.owner for s in summaries] == ["Finance", "Pipeline", "scholar ops"]
    scholar = summaries[-1]
    assert scholar.total_sources == 2
    assert scholar.stale_sources == 0
    assert scholar.ok_count == 2
    assert scholar.warning_count == 1
    assert scholar.latest_check_at == NOW - timedelta(hours=3)
    assert summaries[1].latest_check_at is None


def test_rollup_next_due_and_details() -> None:
    rollups = {r.name: r for r in build_rollups(SOURCES, CHECKS, NOW)}
    export = rollups["Scholar Application Export"]
    assert export.last_details == "Export landed on time."
    assert export.next_due_at == NOW - timedelta(hours=3) + timedelta(hours=24)
    assert export.is_stale is False
    prospect = rollups["Prospect Feed"]
    assert prospect.next_due_at is None
    assert prospect.last_status is None
    assert prospect.is_stale is True


def test_rollup_ordered_by_name() -> None:
    names = [r.name for r in build_rollups(SOURCES, CHECKS, NOW)]
    assert names == sorted(names)


def test_status_all_sources() -> None:
    statuses = build_status(SOURCES, CHECKS)
    assert [s.name for s in statuses] == sorted(s.name for s in SOURCES)
    by_name = {s.name: s for s in statuses}
    assert by_name["Mentor Availability Sheet"].last_status is CheckStatus.WARNING
    assert by_name["Prospect Feed"].last_checked_at is None


def test_status_owner_filter_is_case_insensitive() -> None:
    statuses = build_status(SOURCES, CHECKS, owner="SCHOLAR OPS")
    assert [s.name for s in statuses] == ["Mentor Availability Sheet", "Scholar Application Export"]


def test_status_unknown_owner_is_empty() -> None:
    assert build_status(SOURCES, CHECKS, owner="Nobody") == []


def test_list_stale_sources() -> None:
    stale = list_stale_sources(SOURCES, CHECKS, NOW)
    assert [s.name for s in stale] == ["Award Disbursement Feed", "Prospect Feed"]
    assert stale[1].last_checked_at is None


def test_summary_to_dict_nests_stale_sources() -> None:
    report = build_summary(build_source_health(SOURCES, CHECKS, NOW, 7), 7)
    d = report.to_dict()
    assert d["stale_sources"][1] == {
        "id": 4,
        "name": "Prospect Feed",
        "owner": "Pipeline",
        "sla_hours": 24,
        "last_checked_at": None,
    }
