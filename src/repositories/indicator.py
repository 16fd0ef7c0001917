# ===== src/repositories/indicator.py =====
"""Repository untuk indikator penilaian."""

from typing import List, Optional, Sequence
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import utc_now
from src.models.indicator import Indicator
from src.models.event import IndicatorSnapshot
from src.schemas.indicator import IndicatorCreate, IndicatorUpdate


class IndicatorRepository:
    """Repository untuk operasi indikator."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, indicator_data: IndicatorCreate) -> Indicator:
        indicator = Indicator(**indicator_data.model_dump())
        self.session.add(indicator)
        await self.session.commit()
        await self.session.refresh(indicator)
        return indicator

    async def get_by_id(self, indicator_id: str) -> Optional[Indicator]:
        return await self.session.get(Indicator, indicator_id)

    async def get_all(self, active_only: bool = False) -> List[Indicator]:
        query = select(Indicator).order_by(Indicator.category.asc(), Indicator.name.asc())
        if active_only:
            query = query.where(Indicator.is_active.is_(True))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_active_by_ids(self, indicator_ids: Sequence[str]) -> List[Indicator]:
        """Ambil indikator aktif dari daftar id (yang tidak aktif/tidak ada diabaikan)."""
        if not indicator_ids:
            return []
        query = select(Indicator).where(
            Indicator.id.in_(list(indicator_ids)),
            Indicator.is_active.is_(True),
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, indicator: Indicator, indicator_data: IndicatorUpdate) -> Indicator:
        for key, value in indicator_data.model_dump(exclude_unset=True).items():
            setattr(indicator, key, value)

        indicator.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(indicator)
        return indicator

    async def is_referenced(self, indicator_id: str) -> bool:
        """True jika indikator sudah dipakai oleh snapshot event mana pun."""
        query = select(IndicatorSnapshot.id).where(IndicatorSnapshot.indicator_id == indicator_id).limit(1)
        result = await self.session.execute(query)
        return result.first() is not None

    async def delete(self, indicator_id: str) -> bool:
        result = await self.session.execute(delete(Indicator).where(Indicator.id == indicator_id))
        await self.session.commit()
        return result.rowcount > 0
