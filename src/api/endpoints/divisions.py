"""Division management endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.division import DivisionRepository
from src.services.division import DivisionService
from src.schemas.division import DivisionCreate, DivisionUpdate, DivisionResponse, DivisionListResponse
from src.auth.permissions import get_current_user, manage_required

router = APIRouter()


async def get_division_service(session: AsyncSession = Depends(get_db)) -> DivisionService:
    return DivisionService(DivisionRepository(session))


@router.get("/", response_model=DivisionListResponse, summary="List divisions")
async def list_divisions(
    current_user: dict = Depends(get_current_user),
    division_service: DivisionService = Depends(get_division_service)
):
    return await division_service.list_divisions()


@router.post("/", response_model=DivisionResponse, summary="Create division")
async def create_division(
    division_data: DivisionCreate,
    current_user: dict = Depends(manage_required),
    division_service: DivisionService = Depends(get_division_service)
):
    """
    Create divisi baru.

    **Accessible by**: ADMIN, BPI, KADIV

    - **has_full_report_access**: Kadiv divisi ini dapat melihat hasil semua divisi
    """
    return await division_service.create_division(division_data)


@router.put("/{division_id}", response_model=DivisionResponse, summary="Update division")
async def update_division(
    division_id: str,
    division_data: DivisionUpdate,
    current_user: dict = Depends(manage_required),
    division_service: DivisionService = Depends(get_division_service)
):
    """**Accessible by**: ADMIN, BPI, KADIV"""
    return await division_service.update_division(division_id, division_data)
