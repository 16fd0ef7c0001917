"""User management endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.user import UserRepository
from src.repositories.period import PeriodRepository
from src.repositories.division import DivisionRepository
from src.services.user import UserService
from src.schemas.user import UserCreate, UserUpdate, UserResponse, UserListResponse
from src.schemas.filters import UserFilterParams
from src.schemas.common import MessageResponse
from src.auth.permissions import manage_required

router = APIRouter()


async def get_user_service(session: AsyncSession = Depends(get_db)) -> UserService:
    """Get user service dependency."""
    return UserService(UserRepository(session), PeriodRepository(session), DivisionRepository(session))


@router.get("/", response_model=UserListResponse, summary="Get all users with filters")
async def get_all_users(
    filters: UserFilterParams = Depends(),
    current_user: dict = Depends(manage_required),
    user_service: UserService = Depends(get_user_service)
):
    """
    Get all users with pagination and filters.

    **Query Parameters**:
    - **search**: Search in nama, NIM, email
    - **role**: ADMIN / BPI / KADIV / ANGGOTA
    - **period_id**, **division_id**, **is_active**

    **Examples**:
    - `GET /users?role=KADIV&is_active=true`
    """
    return await user_service.get_all_users(filters)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user by ID")
async def get_user(
    user_id: str,
    current_user: dict = Depends(manage_required),
    user_service: UserService = Depends(get_user_service)
):
    return await user_service.get_user_or_404(user_id)


@router.post("/", response_model=UserResponse, summary="Create user")
async def create_user(
    user_data: UserCreate,
    current_user: dict = Depends(manage_required),
    user_service: UserService = Depends(get_user_service)
):
    """
    Create user baru.

    **Accessible by**: ADMIN, BPI, KADIV

    NIM harus unik; password di-hash dengan bcrypt.
    """
    return await user_service.create_user(user_data)


@router.put("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: dict = Depends(manage_required),
    user_service: UserService = Depends(get_user_service)
):
    """Update user. Kosongkan `password` jika tidak ingin mengganti password."""
    return await user_service.update_user(user_id, user_data)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete user")
async def delete_user(
    user_id: str,
    current_user: dict = Depends(manage_required),
    user_service: UserService = Depends(get_user_service)
):
    return await user_service.delete_user(user_id, current_user["id"])
