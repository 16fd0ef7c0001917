"""Tests for event creation, locking, and cascade delete."""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from src.core.exceptions import InvalidInputError, NotFoundError, StateConflictError
from src.models.enums import EventType, UserRole
from src.repositories.event import EventRepository
from src.schemas.event import EventCreate, EventUpdate
from src.services.event import EventService

from tests.conftest import make_repo, user


def proker_payload(**overrides):
    data = {
        "name": "Penilaian Panitia Makrab",
        "type": EventType.PROKER,
        "period_id": "period-1",
        "proker_id": "proker-1",
        "start_date": datetime(2025, 3, 1),
        "end_date": datetime(2025, 3, 31),
        "indicator_ids": ["ind-1", "ind-2"],
    }
    data.update(overrides)
    return EventCreate(**data)


def stored_event(**overrides):
    data = {
        "id": "event-1",
        "name": "Penilaian Panitia Makrab",
        "type": EventType.PROKER,
        "period_id": "period-1",
        "proker_id": "proker-1",
        "start_date": datetime(2025, 3, 1),
        "end_date": datetime(2025, 3, 31),
        "is_open": True,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


COMMITTEE = [
    user("u1", UserRole.KADIV, "div-a"),
    user("u2", UserRole.ANGGOTA, "div-a"),
    user("u3", UserRole.ANGGOTA, "div-b"),
]


@pytest.fixture
def repos(mock_session):
    return SimpleNamespace(
        event=make_repo(
            mock_session,
            add=stored_event(),
            add_snapshots=[],
            get_by_id=stored_event(),
            has_submissions=False,
            update=stored_event(),
            delete_cascade={"scores": 4, "evaluations": 2, "snapshots": 2, "events": 1},
        ),
        evaluation=make_repo(mock_session, bulk_create_pairs=6),
        indicator=make_repo(
            mock_session,
            get_active_by_ids=[SimpleNamespace(id="ind-1"), SimpleNamespace(id="ind-2")],
        ),
        proker=make_repo(
            mock_session,
            get_by_id=SimpleNamespace(id="proker-1", period_id="period-1"),
            get_active_committee=COMMITTEE,
        ),
        user=make_repo(mock_session, get_active_by_period=[]),
        period=make_repo(mock_session, get_by_id=SimpleNamespace(id="period-1")),
    )


@pytest.fixture
def service(repos):
    return EventService(repos.event, repos.evaluation, repos.indicator, repos.proker, repos.user, repos.period)


class TestCreateEvent:

    @pytest.mark.asyncio
    async def test_creates_snapshots_and_assignments_in_one_transaction(self, service, repos, mock_session):
        with patch.object(EventService, "_build_response", return_value="event-response"), \
                patch("src.services.event.EventCreateResponse", side_effect=lambda **kw: SimpleNamespace(**kw)):
            result = await service.create_event(proker_payload())

        repos.event.add_snapshots.assert_awaited_once_with("event-1", ["ind-1", "ind-2"])
        repos.proker.get_active_committee.assert_awaited_once_with("proker-1", "period-1")

        event_id, pairs = repos.evaluation.bulk_create_pairs.await_args.args
        assert event_id == "event-1"
        assert len(pairs) == 6

        assert result.assignment_summary == {"generated": 6, "created": 6, "skipped": 0}
        assert result.event == "event-response"
        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_or_inactive_indicator(self, service, repos, mock_session):
        repos.indicator.get_active_by_ids.return_value = [SimpleNamespace(id="ind-1")]

        with pytest.raises(InvalidInputError) as exc_info:
            await service.create_event(proker_payload())

        assert exc_info.value.details == {"indicator_ids": ["ind-2"]}
        repos.event.add.assert_not_awaited()
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_period(self, service, repos):
        repos.period.get_by_id.return_value = None
        with pytest.raises(InvalidInputError, match="Periode"):
            await service.create_event(proker_payload())

    @pytest.mark.asyncio
    async def test_proker_from_another_period(self, service, repos):
        repos.proker.get_by_id.return_value = SimpleNamespace(id="proker-1", period_id="period-0")
        with pytest.raises(StateConflictError):
            await service.create_event(proker_payload())
        repos.event.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_proker(self, service, repos):
        repos.proker.get_by_id.return_value = None
        with pytest.raises(InvalidInputError, match="Proker"):
            await service.create_event(proker_payload())

    @pytest.mark.asyncio
    async def test_generation_failure_rolls_back(self, service, repos, mock_session):
        repos.evaluation.bulk_create_pairs.side_effect = RuntimeError("insert failed")

        with pytest.raises(RuntimeError):
            await service.create_event(proker_payload())

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()


class TestRegenerate:

    @pytest.mark.asyncio
    async def test_existing_pairs_are_skipped(self, service, repos, mock_session):
        repos.evaluation.bulk_create_pairs.return_value = 0

        result = await service.regenerate_assignments("event-1")

        assert result.data == {"generated": 6, "created": 0, "skipped": 6}
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_periodic_event_uses_period_roster(self, service, repos):
        repos.event.get_by_id.return_value = stored_event(type=EventType.PERIODIC, proker_id=None)
        repos.evaluation.bulk_create_pairs.return_value = 0

        await service.regenerate_assignments("event-1")

        repos.user.get_active_by_period.assert_awaited_once_with("period-1")
        repos.proker.get_active_committee.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_event(self, service, repos):
        repos.event.get_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await service.regenerate_assignments("nope")


class TestUpdateEvent:

    @pytest.mark.asyncio
    async def test_locked_fields_rejected_after_submission(self, service, repos):
        repos.event.has_submissions.return_value = True

        with pytest.raises(StateConflictError) as exc_info:
            await service.update_event("event-1", EventUpdate(name="Nama Baru"))

        assert exc_info.value.details == {"locked_fields": ["name"]}
        repos.event.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_is_open_toggle_allowed_after_submission(self, service, repos):
        repos.event.has_submissions.return_value = True

        with patch.object(EventService, "_build_response", return_value="ok"):
            result = await service.update_event("event-1", EventUpdate(is_open=False))

        assert result == "ok"
        repos.event.update.assert_awaited_once()
        assert repos.event.update.await_args.args[1] == {"is_open": False}

    @pytest.mark.asyncio
    async def test_unchanged_locked_value_is_not_a_change(self, service, repos):
        repos.event.has_submissions.return_value = True

        with patch.object(EventService, "_build_response", return_value="ok"):
            await service.update_event("event-1", EventUpdate(name="Penilaian Panitia Makrab"))

        repos.event.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dates_editable_before_submission(self, service, repos):
        with patch.object(EventService, "_build_response", return_value="ok"):
            await service.update_event("event-1", EventUpdate(end_date=datetime(2025, 4, 30)))

        repos.event.has_submissions.assert_awaited_once_with("event-1")
        assert repos.event.update.await_args.args[1] == {"end_date": datetime(2025, 4, 30)}

    @pytest.mark.asyncio
    async def test_inverted_dates_rejected(self, service, repos):
        with pytest.raises(InvalidInputError):
            await service.update_event("event-1", EventUpdate(start_date=datetime(2025, 5, 1)))


class TestDeleteEvent:

    @pytest.mark.asyncio
    async def test_delete_commits_cascade(self, service, repos, mock_session):
        result = await service.delete_event("event-1")

        repos.event.delete_cascade.assert_awaited_once_with("event-1")
        mock_session.commit.assert_awaited_once()
        assert result.data["evaluations"] == 2

    @pytest.mark.asyncio
    async def test_failed_cascade_rolls_back(self, service, repos, mock_session):
        repos.event.delete_cascade.side_effect = RuntimeError("fk violation")
        with pytest.raises(RuntimeError):
            await service.delete_event("event-1")
        mock_session.rollback.assert_awaited_once()


class TestDeleteCascadeOrder:

    @pytest.mark.asyncio
    async def test_children_deleted_before_parents(self, mock_session):
        mock_session.execute.return_value = MagicMock(rowcount=1)

        deleted = await EventRepository(mock_session).delete_cascade("event-1")

        tables = [call.args[0].table.name for call in mock_session.execute.await_args_list]
        assert tables == ["evaluation_scores", "evaluations", "indicator_snapshots", "evaluation_events"]
        assert deleted == {"scores": 1, "evaluations": 1, "snapshots": 1, "events": 1}
        mock_session.commit.assert_not_awaited()
