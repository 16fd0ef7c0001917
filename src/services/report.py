# ===== src/services/report.py =====
"""Service untuk laporan hasil penilaian per event."""

import logging
from typing import Dict, List, Optional

from src.core.config import settings
from src.core.exceptions import NotFoundError, PermissionDeniedError
from src.models.enums import UserRole
from src.models.evaluation import Evaluation
from src.repositories.event import EventRepository
from src.repositories.evaluation import EvaluationRepository
from src.schemas.report import (
    EventReport, ReportEventSummary, ReportIndicator, EvaluateeResult, ReportStats
)
from src.utils.report_calculator import ScoreLine, ScoredEvaluation, aggregate_evaluations

logger = logging.getLogger(__name__)


def resolve_division_scope(requester: Dict) -> Optional[str]:
    """
    Tentukan scope divisi laporan untuk requester.

    KADIV hanya melihat evaluatee divisinya sendiri, kecuali divisinya punya
    ``has_full_report_access``. KADIV tanpa divisi dan ADMIN/BPI melihat semua.

    Returns:
        division_id untuk filter, atau None jika tanpa batas
    """
    role = requester.get("role")
    if role not in UserRole.management_roles():
        raise PermissionDeniedError("Anda tidak memiliki akses ke hasil penilaian")

    if role == UserRole.KADIV.value and requester.get("division_id"):
        if not requester.get("has_full_report_access"):
            return requester["division_id"]

    return None


def _to_scored(evaluation: Evaluation) -> ScoredEvaluation:
    """Ambil data yang dibutuhkan kalkulator; identitas penilai tidak ikut."""
    evaluatee = evaluation.evaluatee
    return ScoredEvaluation(
        evaluatee_id=evaluation.evaluatee_id,
        evaluatee_name=evaluatee.name,
        division_name=evaluatee.division.name if evaluatee.division else None,
        feedback=evaluation.feedback,
        scores=[
            ScoreLine(
                indicator_id=score.indicator_snapshot.indicator_id,
                indicator_name=score.indicator_snapshot.indicator.name,
                category=score.indicator_snapshot.indicator.category.value,
                score=score.score,
            )
            for score in evaluation.scores
        ],
    )


class ReportService:
    """Service untuk agregasi hasil penilaian."""

    def __init__(self, event_repo: EventRepository, evaluation_repo: EvaluationRepository):
        self.event_repo = event_repo
        self.evaluation_repo = evaluation_repo

    async def get_event_report(self, event_id: str, requester: Dict) -> EventReport:
        division_scope = resolve_division_scope(requester)

        event = await self.event_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event tidak ditemukan")

        evaluations = await self.evaluation_repo.get_scored_for_report(event_id, division_scope)
        results = aggregate_evaluations(
            [_to_scored(evaluation) for evaluation in evaluations],
            decimal_places=settings.REPORT_DECIMAL_PLACES
        )
        stats = await self.evaluation_repo.get_report_stats(event_id, division_scope)

        snapshots = sorted(
            (s for s in event.snapshots if s.indicator),
            key=lambda s: (s.indicator.category.value, s.indicator.name)
        )
        indicators: List[ReportIndicator] = [
            ReportIndicator(id=s.indicator_id, name=s.indicator.name, category=s.indicator.category.value)
            for s in snapshots
        ]

        logger.info(
            f"Report generated for event {event_id} by {requester.get('id')} "
            f"(scope={division_scope or 'all'}, evaluatees={len(results)})"
        )

        return EventReport(
            event=ReportEventSummary(
                id=event.id,
                name=event.name,
                type=event.type,
                period=event.period.name if event.period else "",
                proker=event.proker.name if event.proker else None,
                start_date=event.start_date,
                end_date=event.end_date,
                indicators=indicators,
            ),
            results=[EvaluateeResult(**result) for result in results],
            stats=ReportStats(**stats),
        )
