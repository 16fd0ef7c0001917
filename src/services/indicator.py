# ===== src/services/indicator.py =====
"""Service untuk indikator penilaian."""

import logging

from src.core.exceptions import NotFoundError, StateConflictError
from src.repositories.indicator import IndicatorRepository
from src.schemas.indicator import IndicatorCreate, IndicatorUpdate, IndicatorResponse, IndicatorListResponse
from src.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class IndicatorService:
    """Indikator bisa diubah bebas; event lama tetap memakai snapshot-nya."""

    def __init__(self, indicator_repo: IndicatorRepository):
        self.indicator_repo = indicator_repo

    async def list_indicators(self, active_only: bool = False) -> IndicatorListResponse:
        indicators = await self.indicator_repo.get_all(active_only=active_only)
        return IndicatorListResponse(indicators=[IndicatorResponse.model_validate(i) for i in indicators])

    async def create_indicator(self, indicator_data: IndicatorCreate) -> IndicatorResponse:
        indicator = await self.indicator_repo.create(indicator_data)
        return IndicatorResponse.model_validate(indicator)

    async def update_indicator(self, indicator_id: str, indicator_data: IndicatorUpdate) -> IndicatorResponse:
        indicator = await self.indicator_repo.get_by_id(indicator_id)
        if not indicator:
            raise NotFoundError("Indikator tidak ditemukan")

        indicator = await self.indicator_repo.update(indicator, indicator_data)
        return IndicatorResponse.model_validate(indicator)

    async def delete_indicator(self, indicator_id: str) -> MessageResponse:
        indicator = await self.indicator_repo.get_by_id(indicator_id)
        if not indicator:
            raise NotFoundError("Indikator tidak ditemukan")

        if await self.indicator_repo.is_referenced(indicator_id):
            raise StateConflictError(
                "Indikator sudah dipakai oleh event penilaian dan tidak bisa dihapus. "
                "Nonaktifkan saja indikator ini."
            )

        await self.indicator_repo.delete(indicator_id)
        logger.info(f"Indicator deleted: {indicator.name}")
        return MessageResponse(message=f"Indikator {indicator.name} berhasil dihapus")
