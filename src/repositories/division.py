# ===== src/repositories/division.py =====
"""Repository untuk divisi."""

from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import utc_now
from src.models.division import Division
from src.schemas.division import DivisionCreate, DivisionUpdate


class DivisionRepository:
    """Repository untuk operasi divisi."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, division_data: DivisionCreate) -> Division:
        division = Division(**division_data.model_dump())
        self.session.add(division)
        await self.session.commit()
        await self.session.refresh(division)
        return division

    async def get_by_id(self, division_id: str) -> Optional[Division]:
        return await self.session.get(Division, division_id)

    async def get_all(self) -> List[Division]:
        result = await self.session.execute(select(Division).order_by(Division.name.asc()))
        return list(result.scalars().all())

    async def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """Check nama divisi (case-insensitive) sudah dipakai."""
        query = select(Division.id).where(func.lower(Division.name) == name.lower())
        if exclude_id:
            query = query.where(Division.id != exclude_id)
        result = await self.session.execute(query)
        return result.first() is not None

    async def update(self, division: Division, division_data: DivisionUpdate) -> Division:
        for key, value in division_data.model_dump(exclude_unset=True).items():
            setattr(division, key, value)

        division.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(division)
        return division
