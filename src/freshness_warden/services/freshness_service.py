"""
Service layer: fetches sources and check history through the repositories, validates
operator input, and hands materialized collections plus an explicit `now` to the
freshness analytics. No commits here; the session owner commits.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from freshness_warden.errors import SourceNotFoundError, ValidationError
from freshness_warden.freshness import (
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
    build_owner_health,
    build_owner_summary,
    build_rollups,
    build_source_health,
    build_status,
    build_summary,
    list_stale_sources,
)
from freshness_warden.ops.events import (
    log_check_logged,
    log_health_computed,
    log_source_added,
    log_source_removed,
    log_source_updated,
)
from freshness_warden.repositories import UNSET, CheckRepository, SourceRepository
from freshness_warden.repositories.base import as_utc

logger = logging.getLogger(__name__)


def _utc_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _require_text(value: Optional[str], field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"Missing required option --{field}.")
    return text


def _require_positive(value: int, field: str) -> int:
    if value <= 0:
        raise ValidationError(f"Option --{field} must be a positive integer.")
    return value


class FreshnessService:
    """Operations behind every CLI command. One instance per session."""

    def __init__(self, session: AsyncSession) -> None:
        self.sources = SourceRepository(session)
        self.checks = CheckRepository(session)

    async def _load(self) -> Tuple[List[SourceMeta], Dict[int, List[CheckRecord]]]:
        sources = await self.sources.list_sources()
        checks = await self.checks.checks_by_source()
        return sources, checks

    # -- mutations -----------------------------------------------------------

    async def add_source(
        self, name: str, owner: str, sla_hours: int, notes: Optional[str] = None
    ) -> bool:
        """Returns False when a source with this name already exists (left unchanged)."""
        name = _require_text(name, "name")
        owner = _require_text(owner, "owner")
        _require_positive(sla_hours, "sla-hours")
        created = await self.sources.add_source(name, owner, sla_hours, notes) is not None
        log_source_added(name, owner, sla_hours, created)
        return created

    async def update_source(
        self,
        name: str,
        owner: Optional[str] = None,
        sla_hours: Optional[int] = None,
        notes: object = UNSET,
    ) -> bool:
        """Returns False when no source has this name. At least one field must be given."""
        name = _require_text(name, "name")
        if owner is None and sla_hours is None and notes is UNSET:
            raise ValidationError(
                "Provide at least one of --owner, --sla-hours, --notes, or --clear-notes."
            )
        fields: Dict[str, object] = {}
        if owner is not None:
            fields["owner"] = _require_text(owner, "owner")
        if sla_hours is not None:
            fields["sla_hours"] = _require_positive(sla_hours, "sla-hours")
        if notes is not UNSET:
            fields["notes"] = notes
        updated = await self.sources.update_source(
            name, owner=fields.get("owner"), sla_hours=fields.get("sla_hours"), notes=notes
        )
        log_source_updated(name, fields, updated is not None)
        return updated is not None

    async def remove_source(self, name: str) -> bool:
        name = _require_text(name, "name")
        removed = await self.sources.remove_source(name)
        log_source_removed(name, removed)
        return removed

    async def log_check(
        self,
        source_name: str,
        status: CheckStatus | str,
        details: Optional[str] = None,
        checked_at: Optional[datetime] = None,
    ) -> CheckRecord:
        """Record a check. String statuses are parsed here (InvalidStatusError on unknown values)."""
        source_name = _require_text(source_name, "source")
        if not isinstance(status, CheckStatus):
            status = CheckStatus.parse(status)
        source = await self.sources.get_by_name(source_name)
        if source is None:
            raise SourceNotFoundError(source_name)
        row = await self.checks.add_check(source.id, status, details, checked_at)
        log_check_logged(source_name, status.value)
        return CheckRecord(
            checked_at=as_utc(row.checked_at_utc),
            status=status,
            details=row.details,
            check_id=row.id,
        )

    # -- queries ---------------------------------------------------------------

    async def source_history(self, name: str, limit: int = 10) -> List[CheckRecord]:
        """Newest first."""
        name = _require_text(name, "name")
        _require_positive(limit, "limit")
        source = await self.sources.get_by_name(name)
        if source is None:
            raise SourceNotFoundError(name)
        return await self.checks.list_history(source.id, limit)

    async def source_status(self, owner: Optional[str] = None) -> List[SourceStatus]:
        sources, checks = await self._load()
        return build_status(sources, checks, owner=owner)

    async def rollups(self, now: Optional[datetime] = None) -> List[SourceRollup]:
        sources, checks = await self._load()
        result = build_rollups(sources, checks, _utc_now(now))
        log_health_computed("rollup", None, len(result), sum(1 for r in result if r.is_stale))
        return result

    async def stale_sources(self, now: Optional[datetime] = None) -> List[StaleSource]:
        sources, checks = await self._load()
        result = list_stale_sources(sources, checks, _utc_now(now))
        log_health_computed("list_stale", None, len(sources), len(result))
        return result

    async def source_health(self, days: int, now: Optional[datetime] = None) -> List[SourceHealth]:
        _require_positive(days, "days")
        sources, checks = await self._load()
        result = build_source_health(sources, checks, _utc_now(now), days)
        log_health_computed("source_health", days, len(result), sum(1 for h in result if h.is_stale))
        return result

    async def owner_health(self, days: int, now: Optional[datetime] = None) -> List[OwnerHealth]:
        result = build_owner_health(await self.source_health(days, now))
        log_health_computed("owner_health", days, len(result), sum(o.stale_count for o in result))
        return result

    async def owner_summary(self, days: int, now: Optional[datetime] = None) -> List[OwnerSummary]:
        return build_owner_summary(await self.owner_health(days, now))

    async def summary(self, days: int, now: Optional[datetime] = None) -> SummaryReport:
        return build_summary(await self.source_health(days, now), days)
