# ===== src/repositories/evaluation.py =====
"""Repository untuk penugasan penilaian dan nilainya."""

from typing import Dict, List, Optional, Sequence
from datetime import datetime
from sqlalchemy import select, and_, func, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import generate_id, utc_now
from src.models.event import EvaluationEvent, IndicatorSnapshot
from src.models.evaluation import Evaluation, EvaluationScore
from src.models.user import User
from src.utils.assignment_generator import AssignmentPair

# Batas parameter asyncpg: 5 kolom x 1000 baris masih aman
BULK_CHUNK_SIZE = 1000


class EvaluationRepository:
    """Repository untuk operasi penilaian.

    Operasi tulis di sini tidak commit; service yang menentukan batas transaksi.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== BULK CREATE =====

    async def bulk_create_pairs(self, event_id: str, pairs: Sequence[AssignmentPair]) -> int:
        """Insert penugasan, lewati pasangan yang sudah ada. Return jumlah baris baru."""
        created = 0
        now = utc_now()

        for start in range(0, len(pairs), BULK_CHUNK_SIZE):
            chunk = pairs[start:start + BULK_CHUNK_SIZE]
            values = [
                {
                    "id": generate_id(),
                    "event_id": event_id,
                    "evaluator_id": pair.evaluator_id,
                    "evaluatee_id": pair.evaluatee_id,
                    "created_at": now,
                }
                for pair in chunk
            ]
            stmt = (
                self._insert()
                .values(values)
                .on_conflict_do_nothing(index_elements=["evaluator_id", "evaluatee_id", "event_id"])
                .returning(Evaluation.id)
            )
            result = await self.session.execute(stmt)
            created += len(result.all())

        return created

    def _insert(self):
        """INSERT sesuai dialect; keduanya mendukung ON CONFLICT DO NOTHING."""
        if self.session.get_bind().dialect.name == "sqlite":
            return sqlite_insert(Evaluation)
        return pg_insert(Evaluation)

    # ===== SUBMISSION =====

    async def get_for_submission(self, evaluation_id: str) -> Optional[Evaluation]:
        """Penilaian + event + snapshot event + nilai yang sudah ada."""
        query = (
            select(Evaluation)
            .options(
                selectinload(Evaluation.event).selectinload(EvaluationEvent.snapshots),
                selectinload(Evaluation.scores),
            )
            .where(Evaluation.id == evaluation_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def claim_submission(self, evaluation_id: str, feedback: str, submitted_at: datetime) -> bool:
        """Tandai penilaian sebagai tersubmit secara atomik.

        Hanya berhasil jika ``submitted_at`` masih NULL; submit kedua (atau
        request paralel yang kalah) mendapat False.
        """
        stmt = (
            update(Evaluation)
            .where(and_(Evaluation.id == evaluation_id, Evaluation.submitted_at.is_(None)))
            .values(feedback=feedback, submitted_at=submitted_at, updated_at=submitted_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def add_scores(self, evaluation_id: str, scores: Dict[str, int]) -> List[EvaluationScore]:
        """Insert nilai per snapshot (snapshot_id -> score)."""
        rows = [
            EvaluationScore(evaluation_id=evaluation_id, indicator_snapshot_id=snapshot_id, score=score)
            for snapshot_id, score in scores.items()
        ]
        self.session.add_all(rows)
        await self.session.flush()
        return rows

    # ===== READ OPERATIONS =====

    async def get_detail(self, evaluation_id: str) -> Optional[Evaluation]:
        """Penilaian lengkap untuk ditampilkan ke penilai."""
        query = (
            self._with_detail(select(Evaluation))
            .where(Evaluation.id == evaluation_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_evaluator(self, evaluator_id: str, event_id: Optional[str] = None) -> List[Evaluation]:
        query = self._with_detail(select(Evaluation)).where(Evaluation.evaluator_id == evaluator_id)
        if event_id:
            query = query.where(Evaluation.event_id == event_id)

        query = query.join(EvaluationEvent, EvaluationEvent.id == Evaluation.event_id).order_by(
            EvaluationEvent.start_date.desc(), Evaluation.created_at.asc()
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def _with_detail(self, query):
        return query.options(
            selectinload(Evaluation.event)
            .selectinload(EvaluationEvent.snapshots)
            .selectinload(IndicatorSnapshot.indicator),
            selectinload(Evaluation.evaluatee).selectinload(User.division),
            selectinload(Evaluation.scores)
            .selectinload(EvaluationScore.indicator_snapshot)
            .selectinload(IndicatorSnapshot.indicator),
        )

    # ===== REPORT =====

    def _scoped(self, query, event_id: str, division_id: Optional[str]):
        query = query.where(Evaluation.event_id == event_id)
        if division_id:
            query = query.where(Evaluation.evaluatee.has(User.division_id == division_id))
        return query

    async def get_scored_for_report(self, event_id: str, division_id: Optional[str] = None) -> List[Evaluation]:
        """Semua penilaian event yang punya minimal satu nilai, dalam scope divisi."""
        query = (
            self._scoped(select(Evaluation), event_id, division_id)
            .where(Evaluation.scores.any())
            .options(
                selectinload(Evaluation.evaluatee).selectinload(User.division),
                selectinload(Evaluation.scores)
                .selectinload(EvaluationScore.indicator_snapshot)
                .selectinload(IndicatorSnapshot.indicator),
            )
            .order_by(Evaluation.submitted_at.asc(), Evaluation.created_at.asc(), Evaluation.id.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_report_stats(self, event_id: str, division_id: Optional[str] = None) -> Dict[str, int]:
        """Statistik penugasan dalam scope.

        Penilai & dinilai unik dihitung dari semua penugasan; hanya
        ``submitted_count`` yang dibatasi pada penilaian yang punya nilai.
        """
        assignment_query = self._scoped(
            select(
                func.count(Evaluation.id),
                func.count(func.distinct(Evaluation.evaluator_id)),
                func.count(func.distinct(Evaluation.evaluatee_id)),
            ),
            event_id,
            division_id,
        )
        submitted_query = self._scoped(
            select(func.count(Evaluation.id)), event_id, division_id
        ).where(Evaluation.scores.any())

        total, evaluators, evaluatees = (await self.session.execute(assignment_query)).one()
        submitted = (await self.session.execute(submitted_query)).scalar() or 0

        return {
            "total_assignments": total,
            "submitted_count": submitted,
            "evaluator_count": evaluators,
            "evaluatee_count": evaluatees,
        }
