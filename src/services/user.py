"""User service - CRUD anggota per periode."""

import logging
from typing import Optional

from src.auth.jwt import get_password_hash
from src.core.config import settings
from src.core.exceptions import NotFoundError, InvalidInputError, StateConflictError
from src.repositories.user import UserRepository
from src.repositories.period import PeriodRepository
from src.repositories.division import DivisionRepository
from src.schemas.user import UserCreate, UserUpdate, UserResponse, UserListResponse
from src.schemas.filters import UserFilterParams
from src.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class UserService:
    """User service dengan single table approach."""

    def __init__(
        self,
        user_repo: UserRepository,
        period_repo: PeriodRepository,
        division_repo: DivisionRepository
    ):
        self.user_repo = user_repo
        self.period_repo = period_repo
        self.division_repo = division_repo

    async def _validate_references(self, period_id: Optional[str], division_id: Optional[str]) -> None:
        if period_id and not await self.period_repo.get_by_id(period_id):
            raise InvalidInputError("Periode tidak ditemukan")
        if division_id and not await self.division_repo.get_by_id(division_id):
            raise InvalidInputError("Divisi tidak ditemukan")

    def _validate_password(self, password: Optional[str]) -> None:
        if password is not None and len(password) < settings.PASSWORD_MIN_LENGTH:
            raise InvalidInputError(f"Password minimal {settings.PASSWORD_MIN_LENGTH} karakter")

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """Create user baru; NIM dan email harus unik."""
        self._validate_password(user_data.password)

        if await self.user_repo.nim_exists(user_data.nim):
            raise StateConflictError(f"NIM {user_data.nim} sudah terdaftar")

        if user_data.email and await self.user_repo.email_exists(user_data.email):
            raise StateConflictError("Email sudah terdaftar")

        await self._validate_references(user_data.period_id, user_data.division_id)

        user = await self.user_repo.create(user_data, get_password_hash(user_data.password))
        logger.info(f"User created: {user.nim} ({user.role.value})")
        return UserResponse.from_user_model(user)

    async def get_user_or_404(self, user_id: str) -> UserResponse:
        """Get user by ID or raise 404."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User tidak ditemukan")
        return UserResponse.from_user_model(user)

    async def get_all_users(self, filters: UserFilterParams) -> UserListResponse:
        users, total = await self.user_repo.get_all_users_filtered(filters)
        return UserListResponse.create(
            items=[UserResponse.from_user_model(user) for user in users],
            total=total,
            page=filters.page,
            size=filters.size
        )

    async def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update user; password kosong berarti tidak diubah."""
        existing_user = await self.user_repo.get_by_id(user_id)
        if not existing_user:
            raise NotFoundError("User tidak ditemukan")

        self._validate_password(user_data.password)

        if user_data.nim and await self.user_repo.nim_exists(user_data.nim, exclude_id=user_id):
            raise StateConflictError(f"NIM {user_data.nim} sudah terdaftar")

        if user_data.email and await self.user_repo.email_exists(user_data.email, exclude_id=user_id):
            raise StateConflictError("Email sudah terdaftar")

        await self._validate_references(user_data.period_id, user_data.division_id)

        hashed_password = get_password_hash(user_data.password) if user_data.password else None
        user = await self.user_repo.update(existing_user, user_data, hashed_password=hashed_password)
        return UserResponse.from_user_model(user)

    async def delete_user(self, user_id: str, current_user_id: str) -> MessageResponse:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User tidak ditemukan")

        if user_id == current_user_id:
            raise StateConflictError("Tidak bisa menghapus akun sendiri")

        await self.user_repo.delete(user_id)
        logger.info(f"User deleted: {user.nim}")
        return MessageResponse(message=f"User {user.name} berhasil dihapus")
