from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from freshness_warden.models.base import Base

T = TypeVar("T", bound=Base)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; stored values are UTC, so tag or convert them."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BaseRepository(Generic[T]):
    """Base repository with add/delete helpers.

    No commits are performed here - commit responsibility is left to the
    session owner (DatabaseManager.session).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with an async session."""
        self.session = session

    async def add(self, entity: T) -> T:
        """Add an entity to the session and flush so generated ids are populated."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: T) -> None:
        """Delete an entity and flush (not committed)."""
        await self.session.delete(entity)
        await self.session.flush()
