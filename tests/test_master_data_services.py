"""Tests for master data rules: indicators, prokers, panitia and periods."""

from types import SimpleNamespace

import pytest

from src.core.exceptions import InvalidInputError, StateConflictError
from src.schemas.period import PeriodCreate, PeriodUpdate
from src.schemas.proker import ProkerUpdate
from src.services.indicator import IndicatorService
from src.services.period import PeriodService
from src.services.proker import ProkerService

from tests.conftest import FIXED_NOW, make_repo


def make_proker(period_id="period-1", name="Makrab"):
    return SimpleNamespace(
        id="proker-1", name=name, division_id="div-1", division=None,
        period_id=period_id, period=None, panitia=[], created_at=FIXED_NOW,
    )


def make_period(period_id="period-1", start_year=2025, end_year=2026, is_active=False):
    return SimpleNamespace(
        id=period_id, name=f"{start_year}/{end_year}", start_year=start_year, end_year=end_year,
        is_active=is_active, created_at=FIXED_NOW, updated_at=None,
    )


class TestIndicatorDelete:

    @pytest.fixture
    def repo(self, mock_session):
        return make_repo(
            mock_session,
            get_by_id=SimpleNamespace(id="ind-1", name="Komunikasi"),
            is_referenced=False,
            delete=True,
        )

    @pytest.mark.asyncio
    async def test_referenced_indicator_is_kept(self, repo):
        repo.is_referenced.return_value = True

        with pytest.raises(StateConflictError):
            await IndicatorService(repo).delete_indicator("ind-1")

        repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unused_indicator_is_deleted(self, repo):
        result = await IndicatorService(repo).delete_indicator("ind-1")

        repo.delete.assert_awaited_once_with("ind-1")
        assert "Komunikasi" in result.message


class TestProkerRules:

    @pytest.fixture
    def proker_repo(self, mock_session):
        return make_repo(
            mock_session,
            get_by_id=make_proker(),
            has_events=False,
            delete=True,
            update=make_proker(period_id="period-2"),
            add_panitia=(SimpleNamespace(id="panitia-1"), True),
        )

    @pytest.fixture
    def service(self, mock_session, proker_repo):
        return ProkerService(
            proker_repo,
            make_repo(mock_session, get_by_id=SimpleNamespace(id="user-1")),
            make_repo(mock_session, get_by_id=make_period("period-2")),
            make_repo(mock_session, get_by_id=SimpleNamespace(id="div-1")),
        )

    @pytest.mark.asyncio
    async def test_delete_refused_while_events_exist(self, service, proker_repo):
        proker_repo.has_events.return_value = True

        with pytest.raises(StateConflictError):
            await service.delete_proker("proker-1")

        proker_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_period_change_refused_while_events_exist(self, service, proker_repo):
        proker_repo.has_events.return_value = True

        with pytest.raises(StateConflictError):
            await service.update_proker("proker-1", ProkerUpdate(period_id="period-2"))

        proker_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_period_change_allowed_without_events(self, service, proker_repo):
        result = await service.update_proker("proker-1", ProkerUpdate(period_id="period-2"))

        proker_repo.update.assert_awaited_once()
        assert result.period_id == "period-2"

    @pytest.mark.asyncio
    async def test_rename_allowed_while_events_exist(self, service, proker_repo):
        proker_repo.has_events.return_value = True
        proker_repo.update.return_value = make_proker(name="Makrab 2025")

        result = await service.update_proker("proker-1", ProkerUpdate(name="Makrab 2025", period_id="period-1"))

        assert result.name == "Makrab 2025"
        proker_repo.has_events.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_panitia_twice_reports_existing(self, service, proker_repo):
        first = await service.add_panitia("proker-1", "user-1")
        proker_repo.add_panitia.return_value = (SimpleNamespace(id="panitia-1"), False)
        again = await service.add_panitia("proker-1", "user-1")

        assert first.data["created"] is True
        assert again.data == {"id": "panitia-1", "proker_id": "proker-1", "user_id": "user-1", "created": False}
        assert again.message == "User sudah menjadi panitia"


class TestPeriodRules:

    @pytest.mark.asyncio
    async def test_inverted_years_rejected_on_update(self, mock_session):
        repo = make_repo(mock_session, get_by_id=make_period(), update=make_period())

        with pytest.raises(InvalidInputError):
            await PeriodService(repo).update_period("period-1", PeriodUpdate(start_year=2027))

        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_activate_delegates_to_single_active_switch(self, mock_session):
        period = make_period()
        repo = make_repo(mock_session, get_by_id=period, activate=make_period(is_active=True))

        result = await PeriodService(repo).activate_period("period-1")

        repo.activate.assert_awaited_once_with(period)
        assert result.is_active is True

    def test_inverted_years_rejected_on_create(self):
        with pytest.raises(ValueError):
            PeriodCreate(name="2026/2025", start_year=2026, end_year=2025)
