# ===== src/services/period.py =====
"""Service untuk periode kepengurusan."""

import logging

from src.core.exceptions import NotFoundError, InvalidInputError
from src.repositories.period import PeriodRepository
from src.schemas.period import PeriodCreate, PeriodUpdate, PeriodResponse, PeriodListResponse

logger = logging.getLogger(__name__)


class PeriodService:
    """Service untuk operasi periode."""

    def __init__(self, period_repo: PeriodRepository):
        self.period_repo = period_repo

    async def list_periods(self) -> PeriodListResponse:
        periods = await self.period_repo.get_all()
        return PeriodListResponse(periods=[PeriodResponse.model_validate(p) for p in periods])

    async def get_active_period(self) -> PeriodResponse:
        period = await self.period_repo.get_active()
        if not period:
            raise NotFoundError("Belum ada periode aktif")
        return PeriodResponse.model_validate(period)

    async def get_period_or_404(self, period_id: str):
        period = await self.period_repo.get_by_id(period_id)
        if not period:
            raise NotFoundError("Periode tidak ditemukan")
        return period

    async def create_period(self, period_data: PeriodCreate) -> PeriodResponse:
        period = await self.period_repo.create(period_data)
        logger.info(f"Period created: {period.name} (active={period.is_active})")
        return PeriodResponse.model_validate(period)

    async def update_period(self, period_id: str, period_data: PeriodUpdate) -> PeriodResponse:
        period = await self.get_period_or_404(period_id)

        start_year = period_data.start_year if period_data.start_year is not None else period.start_year
        end_year = period_data.end_year if period_data.end_year is not None else period.end_year
        if start_year > end_year:
            raise InvalidInputError("Tahun mulai harus lebih kecil atau sama dengan tahun akhir")

        period = await self.period_repo.update(period, period_data)
        return PeriodResponse.model_validate(period)

    async def activate_period(self, period_id: str) -> PeriodResponse:
        """Jadikan periode ini satu-satunya periode aktif."""
        period = await self.get_period_or_404(period_id)
        period = await self.period_repo.activate(period)
        logger.info(f"Period activated: {period.name}")
        return PeriodResponse.model_validate(period)
