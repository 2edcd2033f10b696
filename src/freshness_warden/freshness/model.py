"""
Value types for freshness analytics. Frozen; absence is explicit (None), never a sentinel.
to_dict() keeps a stable key order so JSON output is deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from freshness_warden.errors import InvalidStatusError


class CheckStatus(str, Enum):
    """Outcome of one freshness check. Closed set; parsed once at the boundary."""

    OK = "ok"
    WARNING = "warning"
    FAILED = "failed"

    @classmethod
    def parse(cls, raw: str) -> "CheckStatus":
        """Parse user or database input (case-insensitive, trimmed). Unknown values raise InvalidStatusError."""
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidStatusError(f"Status must be one of: {allowed}.") from None


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _status(value: Optional[CheckStatus]) -> Optional[str]:
    return value.value if value is not None else None


@dataclass(frozen=True)
class CheckRecord:
    """One logged check. check_id is the insertion identity, used only to break timestamp ties."""

    checked_at: datetime
    status: CheckStatus
    details: Optional[str] = None
    check_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "checked_at": _iso(self.checked_at),
            "status": self.status.value,
            "details": self.details,
        }


@dataclass(frozen=True)
class SourceMeta:
    """Snapshot of a source's identity and SLA policy."""

    source_id: int
    name: str
    owner: str
    sla_hours: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class SourceHealth:
    """
    Health of one source over a window of `days`.
    ok/warning/failed and total_checks are windowed; breach_count and last_* use the full history.
    """

    source_id: int
    name: str
    owner: str
    sla_hours: int
    last_checked_at: Optional[datetime]
    hours_since_last: Optional[int]
    last_status: Optional[CheckStatus]
    is_stale: bool
    ok_count: int
    warning_count: int
    failed_count: int
    breach_count: int
    total_checks: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.source_id,
            "name": self.name,
            "owner": self.owner,
            "sla_hours": self.sla_hours,
            "last_checked_at": _iso(self.last_checked_at),
            "hours_since_last": self.hours_since_last,
            "last_status": _status(self.last_status),
            "is_stale": self.is_stale,
            "ok_count": self.ok_count,
            "warning_count": self.warning_count,
            "failed_count": self.failed_count,
            "breach_count": self.breach_count,
            "total_checks": self.total_checks,
        }


@dataclass(frozen=True)
class OwnerHealth:
    """Per-owner fold of SourceHealth records."""

    owner: str
    source_count: int
    stale_count: int
    ok_count: int
    warning_count: int
    failed_count: int
    breach_count: int
    last_checked_at: Optional[datetime]
    last_status: Optional[CheckStatus]

    @property
    def total_checks(self) -> int:
        return self.ok_count + self.warning_count + self.failed_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "source_count": self.source_count,
            "stale_count": self.stale_count,
            "ok_count": self.ok_count,
            "warning_count": self.warning_count,
            "failed_count": self.failed_count,
            "breach_count": self.breach_count,
            "last_checked_at": _iso(self.last_checked_at),
            "last_status": _status(self.last_status),
        }


@dataclass(frozen=True)
class StaleSource:
    source_id: int
    name: str
    owner: str
    sla_hours: int
    last_checked_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.source_id,
            "name": self.name,
            "owner": self.owner,
            "sla_hours": self.sla_hours,
            "last_checked_at": _iso(self.last_checked_at),
        }


@dataclass(frozen=True)
class SummaryReport:
    """Windowed status totals across all sources, plus the sources that are stale right now."""

    days: int
    ok_count: int
    warning_count: int
    failed_count: int
    stale_sources: List[StaleSource]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "ok_count": self.ok_count,
            "warning_count": self.warning_count,
            "failed_count": self.failed_count,
            "stale_sources": [s.to_dict() for s in self.stale_sources],
        }


@dataclass(frozen=True)
class OwnerSummary:
    owner: str
    total_sources: int
    stale_sources: int
    ok_count: int
    warning_count: int
    failed_count: int
    latest_check_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "total_sources": self.total_sources,
            "stale_sources": self.stale_sources,
            "ok_count": self.ok_count,
            "warning_count": self.warning_count,
            "failed_count": self.failed_count,
            "latest_check_at": _iso(self.latest_check_at),
        }


@dataclass(frozen=True)
class SourceRollup:
    """Latest check per source with the moment the source turns stale (next_due_at)."""

    source_id: int
    name: str
    owner: str
    sla_hours: int
    last_status: Optional[CheckStatus]
    last_checked_at: Optional[datetime]
    last_details: Optional[str]
    is_stale: bool
    next_due_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.source_id,
            "name": self.name,
            "owner": self.owner,
            "sla_hours": self.sla_hours,
            "last_status": _status(self.last_status),
            "last_checked_at": _iso(self.last_checked_at),
            "last_details": self.last_details,
            "is_stale": self.is_stale,
            "next_due_at": _iso(self.next_due_at),
        }


@dataclass(frozen=True)
class SourceStatus:
    source_id: int
    name: str
    owner: str
    sla_hours: int
    last_checked_at: Optional[datetime]
    last_status: Optional[CheckStatus]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.source_id,
            "name": self.name,
            "owner": self.owner,
            "sla_hours": self.sla_hours,
            "last_checked_at": _iso(self.last_checked_at),
            "last_status": _status(self.last_status),
        }
