"""Repository queries against an in-memory SQLite database."""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy import DateTime, func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.models import (
    Division, Evaluation, EvaluationEvent, EvaluationScore, EventType, Indicator,
    IndicatorCategory, IndicatorSnapshot, Period, Proker, User, UserRole
)
from src.models.base import utc_now
from src.repositories.evaluation import EvaluationRepository
from src.repositories.event import EventRepository
from src.repositories.indicator import IndicatorRepository
from src.repositories.period import PeriodRepository
from src.repositories.proker import ProkerRepository
from src.schemas.period import PeriodCreate
from src.utils.assignment_generator import generate_proker_pairs, RosterEntry


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as db_session:
        yield db_session

    await engine.dispose()


@pytest_asyncio.fixture
async def world(session):
    """Periode, dua divisi, tiga user (a, b di divisi A; c di divisi B), satu event."""
    period = Period(name="2025/2026", start_year=2025, end_year=2026, is_active=True)
    div_a = Division(name="Divisi A")
    div_b = Division(name="Divisi B")
    session.add_all([period, div_a, div_b])
    await session.flush()

    users = {
        key: User(
            nim=nim, name=f"User {key}", hashed_password="x", role=UserRole.ANGGOTA,
            period_id=period.id, division_id=division.id,
        )
        for key, nim, division in [("a", "1001", div_a), ("b", "1002", div_a), ("c", "1003", div_b)]
    }
    indicator = Indicator(name="Komunikasi", category=IndicatorCategory.SOFT)
    event = EvaluationEvent(
        name="Penilaian Q1", type=EventType.PERIODIC, period_id=period.id,
        start_date=datetime(2025, 3, 1), end_date=datetime(2025, 3, 31),
    )
    session.add_all([*users.values(), indicator, event])
    await session.flush()

    snapshot = IndicatorSnapshot(event_id=event.id, indicator_id=indicator.id)
    session.add(snapshot)
    await session.commit()

    return {
        "period": period, "div_a": div_a, "div_b": div_b, "users": users,
        "indicator": indicator, "event": event, "snapshot": snapshot,
    }


def all_pairs(users):
    return generate_proker_pairs([RosterEntry(u.id, u.role, u.division_id) for u in users.values()])


async def count(session, model):
    return (await session.execute(select(func.count()).select_from(model))).scalar()


async def evaluation_id(session, event_id, evaluator_id, evaluatee_id):
    query = select(Evaluation.id).where(
        Evaluation.event_id == event_id,
        Evaluation.evaluator_id == evaluator_id,
        Evaluation.evaluatee_id == evaluatee_id,
    )
    return (await session.execute(query)).scalar_one()


async def submit(session, world, evaluator, evaluatee, score=4):
    repo = EvaluationRepository(session)
    users = world["users"]
    target_id = await evaluation_id(session, world["event"].id, users[evaluator].id, users[evaluatee].id)
    assert await repo.claim_submission(target_id, "ok", datetime(2025, 3, 10))
    await repo.add_scores(target_id, {world["snapshot"].id: score})
    await session.commit()
    return target_id


class TestBulkCreatePairs:

    @pytest.mark.asyncio
    async def test_second_run_creates_nothing(self, session, world):
        repo = EvaluationRepository(session)
        pairs = all_pairs(world["users"])

        first = await repo.bulk_create_pairs(world["event"].id, pairs)
        await session.commit()
        second = await repo.bulk_create_pairs(world["event"].id, pairs)
        await session.commit()

        assert (first, second) == (6, 0)
        assert await count(session, Evaluation) == 6

    @pytest.mark.asyncio
    async def test_only_new_pairs_inserted(self, session, world):
        repo = EvaluationRepository(session)
        pairs = all_pairs(world["users"])

        await repo.bulk_create_pairs(world["event"].id, pairs[:2])
        created = await repo.bulk_create_pairs(world["event"].id, pairs)

        assert created == len(pairs) - 2


class TestSubmissionClaim:

    @pytest.mark.asyncio
    async def test_claim_succeeds_once(self, session, world):
        repo = EvaluationRepository(session)
        await repo.bulk_create_pairs(world["event"].id, all_pairs(world["users"]))
        target_id = await submit(session, world, "a", "b")

        assert await repo.claim_submission(target_id, "lagi", datetime(2025, 3, 11)) is False
        assert await count(session, EvaluationScore) == 1


class TestReportQueries:

    @pytest.mark.asyncio
    async def test_stats_count_people_across_all_assignments(self, session, world):
        repo = EvaluationRepository(session)
        await repo.bulk_create_pairs(world["event"].id, all_pairs(world["users"]))
        await submit(session, world, "a", "b")

        stats = await repo.get_report_stats(world["event"].id)

        assert stats == {
            "total_assignments": 6,
            "submitted_count": 1,
            "evaluator_count": 3,
            "evaluatee_count": 3,
        }

    @pytest.mark.asyncio
    async def test_fresh_event_still_counts_people(self, session, world):
        repo = EvaluationRepository(session)
        await repo.bulk_create_pairs(world["event"].id, all_pairs(world["users"]))

        stats = await repo.get_report_stats(world["event"].id)

        assert stats["submitted_count"] == 0
        assert (stats["evaluator_count"], stats["evaluatee_count"]) == (3, 3)

    @pytest.mark.asyncio
    async def test_division_scope_filters_by_evaluatee(self, session, world):
        repo = EvaluationRepository(session)
        await repo.bulk_create_pairs(world["event"].id, all_pairs(world["users"]))
        await submit(session, world, "a", "b")
        await submit(session, world, "a", "c")

        scoped = await repo.get_scored_for_report(world["event"].id, world["div_a"].id)
        stats = await repo.get_report_stats(world["event"].id, world["div_a"].id)

        assert [e.evaluatee_id for e in scoped] == [world["users"]["b"].id]
        # evaluatee a dan b ada di divisi A: masing-masing dinilai oleh 2 orang
        assert stats == {
            "total_assignments": 4,
            "submitted_count": 1,
            "evaluator_count": 3,
            "evaluatee_count": 2,
        }

    @pytest.mark.asyncio
    async def test_unscored_evaluations_left_out_of_report(self, session, world):
        repo = EvaluationRepository(session)
        await repo.bulk_create_pairs(world["event"].id, all_pairs(world["users"]))
        await submit(session, world, "c", "a", score=5)

        scored = await repo.get_scored_for_report(world["event"].id)

        assert len(scored) == 1
        assert [s.score for s in scored[0].scores] == [5]


class TestEventCascade:

    @pytest.mark.asyncio
    async def test_delete_removes_event_tree(self, session, world):
        await EvaluationRepository(session).bulk_create_pairs(world["event"].id, all_pairs(world["users"]))
        await submit(session, world, "a", "b")

        deleted = await EventRepository(session).delete_cascade(world["event"].id)
        await session.commit()

        assert deleted == {"scores": 1, "evaluations": 6, "snapshots": 1, "events": 1}
        assert await count(session, EvaluationEvent) == 0
        assert await count(session, Indicator) == 1


class TestPeriodActivation:

    @staticmethod
    async def active_names(session):
        result = await session.execute(select(Period.name).where(Period.is_active.is_(True)))
        return sorted(result.scalars().all())

    @pytest.mark.asyncio
    async def test_creating_active_period_deactivates_others(self, session, world):
        await PeriodRepository(session).create(
            PeriodCreate(name="2026/2027", start_year=2026, end_year=2027, is_active=True)
        )
        assert await self.active_names(session) == ["2026/2027"]

    @pytest.mark.asyncio
    async def test_inactive_period_leaves_current_active(self, session, world):
        await PeriodRepository(session).create(PeriodCreate(name="2026/2027", start_year=2026, end_year=2027))
        assert await self.active_names(session) == ["2025/2026"]

    @pytest.mark.asyncio
    async def test_activate_switches_active_period(self, session, world):
        repo = PeriodRepository(session)
        newer = await repo.create(PeriodCreate(name="2026/2027", start_year=2026, end_year=2027))

        await repo.activate(newer)

        assert await self.active_names(session) == ["2026/2027"]
        assert (await repo.get_active()).id == newer.id


class TestMasterDataReferences:

    @pytest.mark.asyncio
    async def test_indicator_referenced_by_snapshot(self, session, world):
        repo = IndicatorRepository(session)
        unused = Indicator(name="Analisis Data", category=IndicatorCategory.HARD)
        session.add(unused)
        await session.commit()

        assert await repo.is_referenced(world["indicator"].id) is True
        assert await repo.is_referenced(unused.id) is False

    @pytest.mark.asyncio
    async def test_add_panitia_is_idempotent(self, session, world):
        proker = Proker(name="Makrab", division_id=world["div_a"].id, period_id=world["period"].id)
        session.add(proker)
        await session.commit()
        repo = ProkerRepository(session)

        first, created = await repo.add_panitia(proker.id, world["users"]["a"].id)
        again, created_again = await repo.add_panitia(proker.id, world["users"]["a"].id)

        assert (created, created_again) == (True, False)
        assert again.id == first.id

    @pytest.mark.asyncio
    async def test_proker_has_events(self, session, world):
        proker = Proker(name="Makrab", division_id=world["div_a"].id, period_id=world["period"].id)
        session.add(proker)
        await session.commit()
        repo = ProkerRepository(session)

        assert await repo.has_events(proker.id) is False

        session.add(EvaluationEvent(
            name="Penilaian Panitia", type=EventType.PROKER, period_id=world["period"].id,
            proker_id=proker.id, start_date=datetime(2025, 4, 1), end_date=datetime(2025, 4, 30),
        ))
        await session.commit()

        assert await repo.has_events(proker.id) is True


class TestTimestampColumns:

    @pytest.mark.parametrize("column", [
        Period.__table__.c.created_at,
        User.__table__.c.password_updated_at,
        EvaluationEvent.__table__.c.start_date,
        EvaluationEvent.__table__.c.end_date,
        Evaluation.__table__.c.submitted_at,
        EvaluationScore.__table__.c.created_at,
    ])
    def test_stored_without_timezone(self, column):
        assert isinstance(column.type, DateTime)
        assert column.type.timezone is False

    def test_utc_now_is_naive(self):
        assert utc_now().tzinfo is None
