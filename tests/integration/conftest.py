from __future__ import annotations

from typing import AsyncGenerator

import pytest_asyncio

from freshness_warden.core.database import DatabaseManager, open_database


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    """In-memory SQLite with all tables."""
    async with open_database("sqlite+aiosqlite:///:memory:", create_schema=True) as manager:
        yield manager
