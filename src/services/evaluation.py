# ===== src/services/evaluation.py =====
"""Service untuk pengisian penilaian oleh penilai."""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from src.models.base import utc_now
from src.core.exceptions import NotFoundError, InvalidInputError, StateConflictError
from src.models.evaluation import Evaluation
from src.repositories.evaluation import EvaluationRepository
from src.schemas.evaluation import (
    ScoreInput, ScoreResponse, EvaluateePreview,
    EvaluationResponse, EvaluationListResponse
)
from src.schemas.event import SnapshotResponse

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5

ALREADY_SUBMITTED = "Penilaian sudah disubmit"


def _is_valid_score(score) -> bool:
    return isinstance(score, int) and not isinstance(score, bool) and MIN_SCORE <= score <= MAX_SCORE


class EvaluationService:
    """Submit nilai dengan pemeriksaan berurutan, berhenti di kegagalan pertama."""

    def __init__(self, evaluation_repo: EvaluationRepository):
        self.evaluation_repo = evaluation_repo
        self.session = evaluation_repo.session

    async def submit_scores(
        self,
        evaluation_id: str,
        requester_id: str,
        feedback: Optional[str],
        scores: Sequence[ScoreInput],
        now: Optional[datetime] = None
    ) -> EvaluationResponse:
        """
        Submit nilai untuk satu penugasan.

        Urutan pemeriksaan:
        1. penugasan ada dan milik requester (selain itu dianggap tidak ada)
        2. event sedang dibuka dan sekarang di dalam rentang tanggal
        3. belum pernah disubmit
        4. set snapshot tepat sama dengan snapshot event, nilai 1-5
        5. tulis nilai + feedback dalam satu transaksi
        """
        now = now or utc_now()

        # 1. Kepemilikan
        evaluation = await self.evaluation_repo.get_for_submission(evaluation_id)
        if not evaluation or evaluation.evaluator_id != requester_id:
            raise NotFoundError("Penilaian tidak ditemukan")

        # 2. Window event
        event = evaluation.event
        if not event.is_accepting_submissions(now):
            raise StateConflictError("Event penilaian sedang tidak dibuka")

        # 3. Belum disubmit
        if evaluation.submitted_at is not None or evaluation.scores:
            raise StateConflictError(ALREADY_SUBMITTED)

        # 4. Kelengkapan indikator
        snapshot_ids = {snapshot.id for snapshot in event.snapshots}
        submitted_ids = [item.indicator_snapshot_id for item in scores]
        if len(submitted_ids) != len(set(submitted_ids)) or set(submitted_ids) != snapshot_ids:
            raise InvalidInputError(
                "Indikator tidak valid: nilai harus diisi tepat untuk semua indikator event",
                details={
                    "missing": sorted(snapshot_ids - set(submitted_ids)),
                    "unknown": sorted(set(submitted_ids) - snapshot_ids),
                }
            )

        invalid = [item.indicator_snapshot_id for item in scores if not _is_valid_score(item.score)]
        if invalid:
            raise InvalidInputError(
                f"Nilai harus bilangan bulat {MIN_SCORE}-{MAX_SCORE}",
                details={"indicator_snapshot_ids": invalid}
            )

        # 5. Tulis atomik
        try:
            claimed = await self.evaluation_repo.claim_submission(evaluation_id, feedback or "", now)
            if not claimed:
                raise StateConflictError(ALREADY_SUBMITTED)

            await self.evaluation_repo.add_scores(
                evaluation_id,
                {item.indicator_snapshot_id: item.score for item in scores}
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"Concurrent submission rejected for evaluation {evaluation_id}")
            raise StateConflictError(ALREADY_SUBMITTED)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"Evaluation {evaluation_id} submitted by {requester_id} with {len(scores)} scores")

        return self._to_response(await self.evaluation_repo.get_detail(evaluation_id))

    async def list_my_evaluations(
        self,
        requester_id: str,
        event_id: Optional[str] = None
    ) -> EvaluationListResponse:
        """Semua penugasan milik penilai, opsional difilter per event."""
        evaluations = await self.evaluation_repo.get_by_evaluator(requester_id, event_id=event_id)
        items = [self._to_response(evaluation) for evaluation in evaluations]
        submitted = sum(1 for item in items if item.is_submitted)

        return EvaluationListResponse(
            evaluations=items,
            total=len(items),
            submitted=submitted,
            pending=len(items) - submitted,
        )

    async def get_my_evaluation(self, evaluation_id: str, requester_id: str) -> EvaluationResponse:
        evaluation = await self.evaluation_repo.get_detail(evaluation_id)
        if not evaluation or evaluation.evaluator_id != requester_id:
            raise NotFoundError("Penilaian tidak ditemukan")
        return self._to_response(evaluation)

    def _to_response(self, evaluation: Evaluation) -> EvaluationResponse:
        event = evaluation.event
        evaluatee = evaluation.evaluatee

        snapshots = sorted(
            (s for s in event.snapshots if s.indicator),
            key=lambda s: (s.indicator.category.value, s.indicator.name)
        )
        scores: List[ScoreResponse] = [
            ScoreResponse(
                indicator_snapshot_id=score.indicator_snapshot_id,
                indicator_id=score.indicator_snapshot.indicator_id,
                indicator_name=score.indicator_snapshot.indicator.name,
                category=score.indicator_snapshot.indicator.category,
                score=score.score,
            )
            for score in evaluation.scores
            if score.indicator_snapshot and score.indicator_snapshot.indicator
        ]

        return EvaluationResponse(
            id=evaluation.id,
            event_id=event.id,
            event_name=event.name,
            event_type=event.type,
            event_start_date=event.start_date,
            event_end_date=event.end_date,
            event_is_open=event.is_open,
            evaluatee=EvaluateePreview(
                id=evaluatee.id,
                name=evaluatee.name,
                division_name=evaluatee.division.name if evaluatee.division else None,
            ),
            feedback=evaluation.feedback,
            is_submitted=evaluation.is_submitted,
            submitted_at=evaluation.submitted_at,
            indicators=[
                SnapshotResponse(
                    id=s.id,
                    indicator_id=s.indicator_id,
                    name=s.indicator.name,
                    category=s.indicator.category,
                )
                for s in snapshots
            ],
            scores=scores,
        )
