"""Indicator management endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.indicator import IndicatorRepository
from src.services.indicator import IndicatorService
from src.schemas.indicator import IndicatorCreate, IndicatorUpdate, IndicatorResponse, IndicatorListResponse
from src.schemas.common import MessageResponse
from src.auth.permissions import get_current_user, manage_required

router = APIRouter()


async def get_indicator_service(session: AsyncSession = Depends(get_db)) -> IndicatorService:
    return IndicatorService(IndicatorRepository(session))


@router.get("/", response_model=IndicatorListResponse, summary="List indicators")
async def list_indicators(
    active_only: bool = Query(False, description="Hanya indikator aktif"),
    current_user: dict = Depends(get_current_user),
    indicator_service: IndicatorService = Depends(get_indicator_service)
):
    return await indicator_service.list_indicators(active_only=active_only)


@router.post("/", response_model=IndicatorResponse, summary="Create indicator")
async def create_indicator(
    indicator_data: IndicatorCreate,
    current_user: dict = Depends(manage_required),
    indicator_service: IndicatorService = Depends(get_indicator_service)
):
    """
    **Accessible by**: ADMIN, BPI, KADIV

    - **category**: `hard`, `soft`, atau `other`
    """
    return await indicator_service.create_indicator(indicator_data)


@router.put("/{indicator_id}", response_model=IndicatorResponse, summary="Update indicator")
async def update_indicator(
    indicator_id: str,
    indicator_data: IndicatorUpdate,
    current_user: dict = Depends(manage_required),
    indicator_service: IndicatorService = Depends(get_indicator_service)
):
    """Perubahan tidak mempengaruhi event yang sudah berjalan."""
    return await indicator_service.update_indicator(indicator_id, indicator_data)


@router.delete("/{indicator_id}", response_model=MessageResponse, summary="Delete indicator")
async def delete_indicator(
    indicator_id: str,
    current_user: dict = Depends(manage_required),
    indicator_service: IndicatorService = Depends(get_indicator_service)
):
    """Ditolak (409) jika indikator sudah dipakai oleh event."""
    return await indicator_service.delete_indicator(indicator_id)
