"""Endpoints pengisian penilaian oleh penilai."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.evaluation import EvaluationRepository
from src.services.evaluation import EvaluationService
from src.schemas.evaluation import EvaluationSubmit, EvaluationResponse, EvaluationListResponse
from src.auth.permissions import get_current_user

router = APIRouter()


async def get_evaluation_service(session: AsyncSession = Depends(get_db)) -> EvaluationService:
    return EvaluationService(EvaluationRepository(session))


@router.get("/me", response_model=EvaluationListResponse, summary="My assignments")
async def list_my_evaluations(
    event_id: Optional[str] = Query(None, description="Filter per event"),
    current_user: dict = Depends(get_current_user),
    evaluation_service: EvaluationService = Depends(get_evaluation_service)
):
    """Semua penugasan milik user yang sedang login."""
    return await evaluation_service.list_my_evaluations(current_user["id"], event_id=event_id)


@router.get("/{evaluation_id}", response_model=EvaluationResponse, summary="Get my assignment")
async def get_my_evaluation(
    evaluation_id: str,
    current_user: dict = Depends(get_current_user),
    evaluation_service: EvaluationService = Depends(get_evaluation_service)
):
    return await evaluation_service.get_my_evaluation(evaluation_id, current_user["id"])


@router.post("/submit", response_model=EvaluationResponse, summary="Submit scores")
async def submit_scores(
    submit_data: EvaluationSubmit,
    current_user: dict = Depends(get_current_user),
    evaluation_service: EvaluationService = Depends(get_evaluation_service)
):
    """
    Submit nilai untuk satu penugasan.

    - Event harus dibuka dan sekarang dalam rentang tanggal event (409)
    - Hanya bisa disubmit sekali (409)
    - Nilai harus mencakup tepat semua indikator event, masing-masing 1-5 (400)
    """
    return await evaluation_service.submit_scores(
        submit_data.evaluation_id,
        current_user["id"],
        submit_data.feedback,
        submit_data.scores
    )
