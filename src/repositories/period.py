# ===== src/repositories/period.py =====
"""Repository untuk periode kepengurusan."""

from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import utc_now
from src.models.period import Period
from src.schemas.period import PeriodCreate, PeriodUpdate


class PeriodRepository:
    """Repository untuk operasi periode."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== CREATE OPERATIONS =====

    async def create(self, period_data: PeriodCreate) -> Period:
        """Create periode baru; jika aktif, periode lain dinonaktifkan dulu."""
        if period_data.is_active:
            await self._deactivate_all()

        period = Period(**period_data.model_dump())
        self.session.add(period)
        await self.session.commit()
        await self.session.refresh(period)
        return period

    # ===== READ OPERATIONS =====

    async def get_by_id(self, period_id: str) -> Optional[Period]:
        return await self.session.get(Period, period_id)

    async def get_active(self) -> Optional[Period]:
        query = select(Period).where(Period.is_active.is_(True)).order_by(Period.start_year.desc())
        result = await self.session.execute(query)
        return result.scalars().first()

    async def get_all(self) -> List[Period]:
        query = select(Period).order_by(Period.start_year.desc(), Period.created_at.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    # ===== UPDATE OPERATIONS =====

    async def update(self, period: Period, period_data: PeriodUpdate) -> Period:
        update_data = period_data.model_dump(exclude_unset=True)
        if update_data.get("is_active"):
            await self._deactivate_all(exclude_id=period.id)

        for key, value in update_data.items():
            setattr(period, key, value)

        period.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(period)
        return period

    async def activate(self, period: Period) -> Period:
        """Aktifkan satu periode dan nonaktifkan semua periode lain."""
        await self._deactivate_all(exclude_id=period.id)
        period.is_active = True
        period.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(period)
        return period

    async def _deactivate_all(self, exclude_id: Optional[str] = None) -> None:
        query = update(Period).where(Period.is_active.is_(True)).values(is_active=False)
        if exclude_id:
            query = query.where(Period.id != exclude_id)
        await self.session.execute(query)
