from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freshness_warden.freshness.model import CheckRecord, CheckStatus
from freshness_warden.models.check import Check
from .base import BaseRepository, as_utc


def to_check_record(row: Check) -> CheckRecord:
    return CheckRecord(
        checked_at=as_utc(row.checked_at_utc),
        status=CheckStatus.parse(row.status),
        details=row.details,
        check_id=row.id,
    )


class CheckRepository(BaseRepository[Check]):
    """Repository for Check entities. Reads come back as CheckRecord in (checked_at, id) order."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def add_check(
        self,
        source_id: int,
        status: CheckStatus,
        details: Optional[str] = None,
        checked_at_utc: Optional[datetime] = None,
    ) -> Check:
        """Add a check entry; checked_at_utc defaults to now."""
        check = Check(
            source_id=source_id,
            status=status.value,
            checked_at_utc=as_utc(checked_at_utc) if checked_at_utc else datetime.now(timezone.utc),
            details=details,
        )
        await self.add(check)
        return check

    async def list_history(self, source_id: int, limit: int) -> List[CheckRecord]:
        """Newest first, at most `limit` entries."""
        stmt = (
            select(Check)
            .where(Check.source_id == source_id)
            .order_by(Check.checked_at_utc.desc(), Check.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [to_check_record(row) for row in result.scalars().all()]

    async def checks_by_source(self) -> Dict[int, List[CheckRecord]]:
        """Full history of every source, ascending by (checked_at, id)."""
        stmt = select(Check).order_by(Check.source_id, Check.checked_at_utc, Check.id)
        result = await self.session.execute(stmt)
        grouped: Dict[int, List[CheckRecord]] = {}
        for row in result.scalars().all():
            grouped.setdefault(row.source_id, []).append(to_check_record(row))
        return grouped
