# ===== src/repositories/proker.py =====
"""Repository untuk program kerja dan panitia."""

from typing import List, Optional, Tuple
from sqlalchemy import select, and_, func, delete
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import utc_now
from src.models.proker import Proker, Panitia
from src.models.user import User
from src.models.event import EvaluationEvent
from src.schemas.proker import ProkerCreate, ProkerUpdate
from src.schemas.filters import ProkerFilterParams


class ProkerRepository:
    """Repository untuk operasi proker dan keanggotaan panitia."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_relations(self, query):
        return query.options(
            selectinload(Proker.division),
            selectinload(Proker.period),
            selectinload(Proker.panitia).selectinload(Panitia.user),
        )

    # ===== PROKER CRUD =====

    async def create(self, proker_data: ProkerCreate) -> Proker:
        proker = Proker(**proker_data.model_dump())
        self.session.add(proker)
        await self.session.commit()
        return await self.get_by_id(proker.id)

    async def get_by_id(self, proker_id: str) -> Optional[Proker]:
        """Get proker dengan division, period, dan panitia."""
        query = self._with_relations(select(Proker).where(Proker.id == proker_id))
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_all_filtered(self, filters: ProkerFilterParams) -> Tuple[List[Proker], int]:
        query = select(Proker)

        if filters.period_id:
            query = query.where(Proker.period_id == filters.period_id)
        if filters.division_id:
            query = query.where(Proker.division_id == filters.division_id)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar()

        offset = (filters.page - 1) * filters.size
        query = self._with_relations(query).order_by(Proker.name.asc()).offset(offset).limit(filters.size)
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def update(self, proker: Proker, proker_data: ProkerUpdate) -> Proker:
        for key, value in proker_data.model_dump(exclude_unset=True).items():
            setattr(proker, key, value)

        proker.updated_at = utc_now()
        await self.session.commit()
        return await self.get_by_id(proker.id)

    async def has_events(self, proker_id: str) -> bool:
        query = select(EvaluationEvent.id).where(EvaluationEvent.proker_id == proker_id).limit(1)
        result = await self.session.execute(query)
        return result.first() is not None

    async def delete(self, proker_id: str) -> bool:
        """Hapus proker beserta keanggotaan panitianya."""
        await self.session.execute(delete(Panitia).where(Panitia.proker_id == proker_id))
        result = await self.session.execute(delete(Proker).where(Proker.id == proker_id))
        await self.session.commit()
        return result.rowcount > 0

    # ===== PANITIA =====

    async def get_panitia(self, proker_id: str, user_id: str) -> Optional[Panitia]:
        query = select(Panitia).where(
            and_(Panitia.proker_id == proker_id, Panitia.user_id == user_id)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def add_panitia(self, proker_id: str, user_id: str) -> Tuple[Panitia, bool]:
        """Tambah panitia; idempotent. Return (panitia, created)."""
        existing = await self.get_panitia(proker_id, user_id)
        if existing:
            return existing, False

        panitia = Panitia(proker_id=proker_id, user_id=user_id)
        self.session.add(panitia)
        await self.session.commit()
        return panitia, True

    async def remove_panitia(self, proker_id: str, user_id: str) -> bool:
        result = await self.session.execute(
            delete(Panitia).where(
                and_(Panitia.proker_id == proker_id, Panitia.user_id == user_id)
            )
        )
        await self.session.commit()
        return result.rowcount > 0

    async def get_active_committee(self, proker_id: str, period_id: str) -> List[User]:
        """Panitia proker yang aktif dan terdaftar di periode event."""
        query = (
            select(User)
            .join(Panitia, Panitia.user_id == User.id)
            .where(
                and_(
                    Panitia.proker_id == proker_id,
                    User.is_active.is_(True),
                    User.period_id == period_id,
                )
            )
            .order_by(User.name.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
