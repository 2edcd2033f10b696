from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from freshness_warden.freshness.model import SourceMeta
from freshness_warden.models.check import Check
from freshness_warden.models.source import Source
from .base import BaseRepository

UNSET = object()  # "argument not given"; None means "clear"


def to_source_meta(row: Source) -> SourceMeta:
    return SourceMeta(
        source_id=row.id,
        name=row.name,
        owner=row.owner,
        sla_hours=row.sla_hours,
        notes=row.notes,
    )


class SourceRepository(BaseRepository[Source]):
    """Repository for Source entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_name(self, name: str) -> Optional[Source]:
        stmt = select(Source).where(Source.name == name).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Source))
        return int(result.scalar_one())

    async def add_source(
        self,
        name: str,
        owner: str,
        sla_hours: int,
        notes: Optional[str] = None,
    ) -> Optional[Source]:
        """Insert a source. Returns None (and changes nothing) when the name already exists."""
        if await self.get_by_name(name) is not None:
            return None
        return await self.add(Source(name=name, owner=owner, sla_hours=sla_hours, notes=notes))

    async def update_source(
        self,
        name: str,
        owner: Optional[str] = None,
        sla_hours: Optional[int] = None,
        notes: object = UNSET,
    ) -> Optional[Source]:
        """
        Update the given fields. None leaves owner/sla_hours untouched; notes is only
        written when passed (None clears it). Returns None if the source does not exist.
        """
        source = await self.get_by_name(name)
        if source is None:
            return None
        if owner is not None:
            source.owner = owner
        if sla_hours is not None:
            source.sla_hours = sla_hours
        if notes is not UNSET:
            source.notes = notes  # type: ignore[assignment]
        await self.session.flush()
        return source

    async def remove_source(self, name: str) -> bool:
        """Delete the source and its checks. Returns False when no such source exists."""
        source = await self.get_by_name(name)
        if source is None:
            return False
        await self.session.execute(delete(Check).where(Check.source_id == source.id))
        await self.delete(source)
        return True

    async def list_sources(self) -> List[SourceMeta]:
        """All sources ordered by name."""
        result = await self.session.execute(select(Source).order_by(Source.name))
        return [to_source_meta(row) for row in result.scalars().all()]
