"""Program kerja (proker) dan panitia endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.proker import ProkerRepository
from src.repositories.user import UserRepository
from src.repositories.period import PeriodRepository
from src.repositories.division import DivisionRepository
from src.services.proker import ProkerService
from src.schemas.proker import ProkerCreate, ProkerUpdate, PanitiaAdd, ProkerResponse, ProkerListResponse
from src.schemas.filters import ProkerFilterParams
from src.schemas.common import MessageResponse, SuccessResponse
from src.auth.permissions import get_current_user, manage_required

router = APIRouter()


async def get_proker_service(session: AsyncSession = Depends(get_db)) -> ProkerService:
    return ProkerService(
        ProkerRepository(session),
        UserRepository(session),
        PeriodRepository(session),
        DivisionRepository(session)
    )


@router.get("/", response_model=ProkerListResponse, summary="List prokers")
async def list_prokers(
    filters: ProkerFilterParams = Depends(),
    current_user: dict = Depends(get_current_user),
    proker_service: ProkerService = Depends(get_proker_service)
):
    """Daftar proker, bisa difilter per periode/divisi."""
    return await proker_service.list_prokers(filters)


@router.get("/{proker_id}", response_model=ProkerResponse, summary="Get proker with panitia")
async def get_proker(
    proker_id: str,
    current_user: dict = Depends(get_current_user),
    proker_service: ProkerService = Depends(get_proker_service)
):
    return await proker_service.get_proker(proker_id)


@router.post("/", response_model=ProkerResponse, summary="Create proker")
async def create_proker(
    proker_data: ProkerCreate,
    current_user: dict = Depends(manage_required),
    proker_service: ProkerService = Depends(get_proker_service)
):
    """**Accessible by**: ADMIN, BPI, KADIV"""
    return await proker_service.create_proker(proker_data)


@router.put("/{proker_id}", response_model=ProkerResponse, summary="Update proker")
async def update_proker(
    proker_id: str,
    proker_data: ProkerUpdate,
    current_user: dict = Depends(manage_required),
    proker_service: ProkerService = Depends(get_proker_service)
):
    return await proker_service.update_proker(proker_id, proker_data)


@router.delete("/{proker_id}", response_model=MessageResponse, summary="Delete proker")
async def delete_proker(
    proker_id: str,
    current_user: dict = Depends(manage_required),
    proker_service: ProkerService = Depends(get_proker_service)
):
    """Ditolak jika proker masih dipakai event."""
    return await proker_service.delete_proker(proker_id)


@router.post("/{proker_id}/panitia", response_model=SuccessResponse, summary="Add panitia")
async def add_panitia(
    proker_id: str,
    panitia_data: PanitiaAdd,
    current_user: dict = Depends(manage_required),
    proker_service: ProkerService = Depends(get_proker_service)
):
    """Idempotent: user yang sudah menjadi panitia dikembalikan apa adanya."""
    return await proker_service.add_panitia(proker_id, panitia_data.user_id)


@router.delete("/{proker_id}/panitia/{user_id}", response_model=MessageResponse, summary="Remove panitia")
async def remove_panitia(
    proker_id: str,
    user_id: str,
    current_user: dict = Depends(manage_required),
    proker_service: ProkerService = Depends(get_proker_service)
):
    return await proker_service.remove_panitia(proker_id, user_id)
