"""Period management endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.period import PeriodRepository
from src.services.period import PeriodService
from src.schemas.period import PeriodCreate, PeriodUpdate, PeriodResponse, PeriodListResponse
from src.auth.permissions import get_current_user, manage_required

router = APIRouter()


async def get_period_service(session: AsyncSession = Depends(get_db)) -> PeriodService:
    return PeriodService(PeriodRepository(session))


@router.get("/", response_model=PeriodListResponse, summary="List periods")
async def list_periods(
    current_user: dict = Depends(get_current_user),
    period_service: PeriodService = Depends(get_period_service)
):
    """Semua periode, tahun mulai terbaru lebih dulu."""
    return await period_service.list_periods()


@router.get("/active", response_model=PeriodResponse, summary="Get active period")
async def get_active_period(
    current_user: dict = Depends(get_current_user),
    period_service: PeriodService = Depends(get_period_service)
):
    return await period_service.get_active_period()


@router.post("/", response_model=PeriodResponse, summary="Create period")
async def create_period(
    period_data: PeriodCreate,
    current_user: dict = Depends(manage_required),
    period_service: PeriodService = Depends(get_period_service)
):
    """
    Create periode baru.

    **Accessible by**: ADMIN, BPI, KADIV

    Jika `is_active=true`, periode lain otomatis dinonaktifkan.
    """
    return await period_service.create_period(period_data)


@router.put("/{period_id}", response_model=PeriodResponse, summary="Update period")
async def update_period(
    period_id: str,
    period_data: PeriodUpdate,
    current_user: dict = Depends(manage_required),
    period_service: PeriodService = Depends(get_period_service)
):
    """**Accessible by**: ADMIN, BPI, KADIV"""
    return await period_service.update_period(period_id, period_data)


@router.post("/{period_id}/activate", response_model=PeriodResponse, summary="Activate period")
async def activate_period(
    period_id: str,
    current_user: dict = Depends(manage_required),
    period_service: PeriodService = Depends(get_period_service)
):
    """Jadikan periode ini satu-satunya periode aktif."""
    return await period_service.activate_period(period_id)
