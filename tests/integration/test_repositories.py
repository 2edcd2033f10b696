"""
Integration tests for repositories on in-memory SQLite: source CRUD, check history
ordering and UTC normalization of stored timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from freshness_warden.core.database import DatabaseManager
from freshness_warden.freshness import CheckStatus
from freshness_warden.repositories import UNSET, CheckRepository, SourceRepository

T0 = datetime(2026, 5, 1, 8, 0, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_add_source_ignores_duplicate_name(db: DatabaseManager) -> None:
    async with db.session() as session:
        repo = SourceRepository(session)
        first = await repo.add_source("CRM Export", "Data Ops", 24, "nightly")
        second = await repo.add_source("CRM Export", "Someone Else", 1)
        assert first is not None and first.id is not None
        assert second is None

    async with db.session() as session:
        [meta] = await SourceRepository(session).list_sources()
        assert meta.owner == "Data Ops"
        assert meta.sla_hours == 24
        assert meta.notes == "nightly"


@pytest.mark.asyncio
async def test_update_source_fields_and_notes(db: DatabaseManager) -> None:
    async with db.session() as session:
        repo = SourceRepository(session)
        await repo.add_source("Feed", "Ops", 24, "keep me")
        await repo.update_source("Feed", sla_hours=12)
        source = await repo.get_by_name("Feed")
        assert (source.owner, source.sla_hours, source.notes) == ("Ops", 12, "keep me")

        await repo.update_source("Feed", owner="Finance", notes=None)
        source = await repo.get_by_name("Feed")
        assert (source.owner, source.sla_hours, source.notes) == ("Finance", 12, None)

        assert await repo.update_source("Missing", owner="x") is None


@pytest.mark.asyncio
async def test_update_source_unset_notes_left_alone(db: DatabaseManager) -> None:
    async with db.session() as session:
        repo = SourceRepository(session)
        await repo.add_source("Feed", "Ops", 24, "keep me")
        await repo.update_source("Feed", owner="Finance", notes=UNSET)
        source = await repo.get_by_name("Feed")
        assert (source.owner, source.notes) == ("Finance", "keep me")


@pytest.mark.asyncio
async def test_remove_source_deletes_checks(db: DatabaseManager) -> None:
    async with db.session() as session:
        sources = SourceRepository(session)
        checks = CheckRepository(session)
        source = await sources.add_source("Feed", "Ops", 24)
        await checks.add_check(source.id, CheckStatus.OK, checked_at_utc=T0)

    async with db.session() as session:
        assert await SourceRepository(session).remove_source("Feed") is True
        assert await SourceRepository(session).remove_source("Feed") is False

    async with db.session() as session:
        assert await CheckRepository(session).checks_by_source() == {}
        assert await SourceRepository(session).count() == 0


@pytest.mark.asyncio
async def test_remove_source_keeps_other_sources_checks(db: DatabaseManager) -> None:
    async with db.session() as session:
        sources = SourceRepository(session)
        checks = CheckRepository(session)
        gone = await sources.add_source("Feed", "Ops", 24)
        kept = await sources.add_source("Sheet", "Ops", 24)
        await checks.add_check(gone.id, CheckStatus.OK, checked_at_utc=T0)
        await checks.add_check(kept.id, CheckStatus.FAILED, checked_at_utc=T0)
        kept_id = kept.id

    async with db.session() as session:
        assert await SourceRepository(session).remove_source("Feed") is True

    async with db.session() as session:
        by_source = await CheckRepository(session).checks_by_source()
        [meta] = await SourceRepository(session).list_sources()
    assert list(by_source) == [kept_id]
    assert [c.status for c in by_source[kept_id]] == [CheckStatus.FAILED]
    assert meta.name == "Sheet"


@pytest.mark.asyncio
async def test_history_newest_first_with_limit(db: DatabaseManager) -> None:
    async with db.session() as session:
        source = await SourceRepository(session).add_source("Feed", "Ops", 24)
        checks = CheckRepository(session)
        await checks.add_check(source.id, CheckStatus.OK, "first", T0)
        await checks.add_check(source.id, CheckStatus.WARNING, "third", T0 + timedelta(hours=2))
        await checks.add_check(source.id, CheckStatus.FAILED, "second", T0 + timedelta(hours=1))
        source_id = source.id

    async with db.session() as session:
        history = await CheckRepository(session).list_history(source_id, limit=2)
        assert [c.details for c in history] == ["third", "second"]
        assert history[0].status is CheckStatus.WARNING
        assert history[0].checked_at == T0 + timedelta(hours=2)
        assert history[0].checked_at.tzinfo is not None


@pytest.mark.asyncio
async def test_checks_by_source_ascending_with_id_tiebreak(db: DatabaseManager) -> None:
    async with db.session() as session:
        sources = SourceRepository(session)
        a = await sources.add_source("A", "Ops", 24)
        b = await sources.add_source("B", "Ops", 24)
        checks = CheckRepository(session)
        await checks.add_check(a.id, CheckStatus.OK, "late", T0 + timedelta(hours=5))
        await checks.add_check(a.id, CheckStatus.OK, "tie-1", T0)
        await checks.add_check(a.id, CheckStatus.FAILED, "tie-2", T0)
        await checks.add_check(b.id, CheckStatus.WARNING, None, T0)
        a_id, b_id = a.id, b.id

    async with db.session() as session:
        grouped = await CheckRepository(session).checks_by_source()
    assert [c.details for c in grouped[a_id]] == ["tie-1", "tie-2", "late"]
    assert grouped[a_id][0].check_id < grouped[a_id][1].check_id
    assert [c.status for c in grouped[b_id]] == [CheckStatus.WARNING]


@pytest.mark.asyncio
async def test_add_check_converts_to_utc(db: DatabaseManager) -> None:
    plus_two = timezone(timedelta(hours=2))
    async with db.session() as session:
        source = await SourceRepository(session).add_source("Feed", "Ops", 24)
        await CheckRepository(session).add_check(
            source.id, CheckStatus.OK, checked_at_utc=datetime(2026, 5, 1, 10, 0, tzinfo=plus_two)
        )
        source_id = source.id

    async with db.session() as session:
        [record] = await CheckRepository(session).list_history(source_id, limit=5)
    assert record.checked_at == T0
    assert record.checked_at.utcoffset() == timedelta(0)
