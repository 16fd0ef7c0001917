"""Evaluation event endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.event import EventRepository
from src.repositories.evaluation import EvaluationRepository
from src.repositories.indicator import IndicatorRepository
from src.repositories.proker import ProkerRepository
from src.repositories.user import UserRepository
from src.repositories.period import PeriodRepository
from src.services.event import EventService
from src.schemas.event import EventCreate, EventUpdate, EventResponse, EventListResponse, EventCreateResponse
from src.schemas.filters import EventFilterParams
from src.schemas.common import SuccessResponse
from src.auth.permissions import get_current_user, manage_required

router = APIRouter()


async def get_event_service(session: AsyncSession = Depends(get_db)) -> EventService:
    return EventService(
        EventRepository(session),
        EvaluationRepository(session),
        IndicatorRepository(session),
        ProkerRepository(session),
        UserRepository(session),
        PeriodRepository(session)
    )


@router.get("/", response_model=EventListResponse, summary="List events")
async def list_events(
    filters: EventFilterParams = Depends(),
    current_user: dict = Depends(get_current_user),
    event_service: EventService = Depends(get_event_service)
):
    """Daftar event terbaru lebih dulu, dengan jumlah penugasan."""
    return await event_service.list_events(filters)


@router.get("/{event_id}", response_model=EventResponse, summary="Get event")
async def get_event(
    event_id: str,
    current_user: dict = Depends(get_current_user),
    event_service: EventService = Depends(get_event_service)
):
    return await event_service.get_event(event_id)


@router.post("/", response_model=EventCreateResponse, summary="Create event")
async def create_event(
    event_data: EventCreate,
    current_user: dict = Depends(manage_required),
    event_service: EventService = Depends(get_event_service)
):
    """
    Create event penilaian dan generate penugasan.

    **Accessible by**: ADMIN, BPI, KADIV

    - **PERIODIC**: semua user aktif periode, sesuai aturan role
    - **PROKER**: semua panitia saling menilai; `proker_id` wajib dan harus satu periode

    Indikator terpilih di-snapshot saat event dibuat.
    """
    return await event_service.create_event(event_data)


@router.put("/{event_id}", response_model=EventResponse, summary="Update event")
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    current_user: dict = Depends(manage_required),
    event_service: EventService = Depends(get_event_service)
):
    """
    Update event.

    `is_open` selalu bisa diubah. Nama dan tanggal terkunci (409) setelah ada
    penilaian yang disubmit.
    """
    return await event_service.update_event(event_id, event_data)


@router.post("/{event_id}/regenerate", response_model=SuccessResponse, summary="Regenerate assignments")
async def regenerate_assignments(
    event_id: str,
    current_user: dict = Depends(manage_required),
    event_service: EventService = Depends(get_event_service)
):
    """Generate ulang penugasan (pasangan yang sudah ada dilewati)."""
    return await event_service.regenerate_assignments(event_id)


@router.delete("/{event_id}", response_model=SuccessResponse, summary="Delete event")
async def delete_event(
    event_id: str,
    current_user: dict = Depends(manage_required),
    event_service: EventService = Depends(get_event_service)
):
    """Hapus event beserta semua nilai, penugasan, dan snapshot indikatornya."""
    return await event_service.delete_event(event_id)
