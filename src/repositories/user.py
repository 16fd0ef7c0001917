"""User repository - login via NIM, keanggotaan per periode."""

from typing import List, Optional, Tuple
from sqlalchemy import select, and_, or_, func, update, delete
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import utc_now
from src.models.user import User

from src.schemas.user import UserCreate, UserUpdate
from src.schemas.filters import UserFilterParams


class UserRepository:
    """User repository dengan single table (role sebagai enum)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== USER CRUD OPERATIONS =====

    async def create(self, user_data: UserCreate, hashed_password: str) -> User:
        """Create user; password sudah di-hash oleh service."""
        user = User(
            nim=user_data.nim,
            name=user_data.name,
            email=user_data.email.lower() if user_data.email else None,
            hashed_password=hashed_password,
            role=user_data.role,
            period_id=user_data.period_id,
            division_id=user_data.division_id,
            is_active=user_data.is_active,
        )

        self.session.add(user)
        await self.session.commit()
        return await self.get_by_id(user.id)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by id, dengan relasi period dan division."""
        query = (
            select(User)
            .options(selectinload(User.period), selectinload(User.division))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_nim(self, nim: str) -> Optional[User]:
        """Get user by NIM (untuk login)."""
        query = select(User).where(User.nim == nim)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def nim_exists(self, nim: str, exclude_id: Optional[str] = None) -> bool:
        query = select(User.id).where(User.nim == nim)
        if exclude_id:
            query = query.where(User.id != exclude_id)
        result = await self.session.execute(query)
        return result.first() is not None

    async def email_exists(self, email: str, exclude_id: Optional[str] = None) -> bool:
        query = select(User.id).where(User.email == email.lower())
        if exclude_id:
            query = query.where(User.id != exclude_id)
        result = await self.session.execute(query)
        return result.first() is not None

    async def update(self, user: User, user_data: UserUpdate, hashed_password: Optional[str] = None) -> User:
        """Update user information. Field ``password`` ditangani lewat ``hashed_password``."""
        update_data = user_data.model_dump(exclude_unset=True, exclude={"password"})
        for key, value in update_data.items():
            if key == "email" and value:
                value = value.lower()
            setattr(user, key, value)

        if hashed_password:
            user.hashed_password = hashed_password

        user.updated_at = utc_now()
        await self.session.commit()
        return await self.get_by_id(user.id)

    async def update_password(self, user_id: str, new_hashed_password: str) -> bool:
        """Update password dan tandai bahwa password default sudah diganti."""
        now = utc_now()
        query = (
            update(User)
            .where(User.id == user_id)
            .values(
                hashed_password=new_hashed_password,
                password_updated_at=now,
                updated_at=now
            )
        )
        result = await self.session.execute(query)
        await self.session.commit()
        return result.rowcount > 0

    async def delete(self, user_id: str) -> bool:
        result = await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.commit()
        return result.rowcount > 0

    # ===== USER LISTING =====

    async def get_all_users_filtered(self, filters: UserFilterParams) -> Tuple[List[User], int]:
        """Get users dengan filter dan pagination."""
        query = select(User)

        if filters.search:
            search_term = f"%{filters.search}%"
            query = query.where(
                or_(
                    User.name.ilike(search_term),
                    User.nim.ilike(search_term),
                    User.email.ilike(search_term),
                )
            )

        if filters.is_active is not None:
            query = query.where(User.is_active == filters.is_active)

        if filters.role:
            query = query.where(User.role == filters.role)

        if filters.period_id:
            query = query.where(User.period_id == filters.period_id)

        if filters.division_id:
            query = query.where(User.division_id == filters.division_id)

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.session.execute(count_query)
        total = total_result.scalar()

        # Apply pagination
        offset = (filters.page - 1) * filters.size
        query = (
            query.options(selectinload(User.period), selectinload(User.division))
            .order_by(User.name.asc())
            .offset(offset)
            .limit(filters.size)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_active_by_period(self, period_id: str) -> List[User]:
        """Semua user aktif dalam satu periode (roster event PERIODIC)."""
        query = (
            select(User)
            .where(and_(User.period_id == period_id, User.is_active.is_(True)))
            .order_by(User.role.asc(), User.name.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
