# ===== src/repositories/event.py =====
"""Repository untuk event penilaian dan snapshot indikator."""

from typing import Dict, List, Optional, Sequence, Tuple
from sqlalchemy import select, func, delete
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.base import utc_now
from src.models.event import EvaluationEvent, IndicatorSnapshot
from src.models.evaluation import Evaluation, EvaluationScore
from src.schemas.filters import EventFilterParams


class EventRepository:
    """Repository untuk operasi event.

    Method ``add``/``add_snapshots``/``delete_cascade`` hanya flush; commit
    dilakukan oleh service supaya beberapa langkah berada dalam satu transaksi.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_relations(self, query):
        return query.options(
            selectinload(EvaluationEvent.period),
            selectinload(EvaluationEvent.proker),
            selectinload(EvaluationEvent.snapshots).selectinload(IndicatorSnapshot.indicator),
        )

    # ===== CREATE OPERATIONS =====

    async def add(self, event: EvaluationEvent) -> EvaluationEvent:
        self.session.add(event)
        await self.session.flush()
        return event

    async def add_snapshots(self, event_id: str, indicator_ids: Sequence[str]) -> List[IndicatorSnapshot]:
        """Satu snapshot per indikator terpilih."""
        snapshots = [IndicatorSnapshot(event_id=event_id, indicator_id=indicator_id) for indicator_id in indicator_ids]
        self.session.add_all(snapshots)
        await self.session.flush()
        return snapshots

    # ===== READ OPERATIONS =====

    async def get_by_id(self, event_id: str) -> Optional[EvaluationEvent]:
        """Get event dengan period, proker, dan snapshot->indikator."""
        query = self._with_relations(select(EvaluationEvent).where(EvaluationEvent.id == event_id))
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_all_filtered(self, filters: EventFilterParams) -> Tuple[List[EvaluationEvent], int]:
        query = select(EvaluationEvent)

        if filters.period_id:
            query = query.where(EvaluationEvent.period_id == filters.period_id)
        if filters.type:
            query = query.where(EvaluationEvent.type == filters.type)
        if filters.is_open is not None:
            query = query.where(EvaluationEvent.is_open == filters.is_open)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar()

        offset = (filters.page - 1) * filters.size
        query = (
            self._with_relations(query)
            .order_by(EvaluationEvent.created_at.desc())
            .offset(offset)
            .limit(filters.size)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_evaluation_counts(self, event_ids: Sequence[str]) -> Dict[str, Tuple[int, int]]:
        """Map event_id -> (jumlah penugasan, jumlah yang sudah disubmit)."""
        if not event_ids:
            return {}

        query = (
            select(
                Evaluation.event_id,
                func.count(Evaluation.id),
                func.count(Evaluation.submitted_at),
            )
            .where(Evaluation.event_id.in_(list(event_ids)))
            .group_by(Evaluation.event_id)
        )
        result = await self.session.execute(query)
        return {event_id: (total, submitted) for event_id, total, submitted in result.all()}

    async def has_submissions(self, event_id: str) -> bool:
        """True jika sudah ada penilaian yang disubmit (nama/tanggal terkunci)."""
        query = (
            select(Evaluation.id)
            .where(Evaluation.event_id == event_id, Evaluation.submitted_at.is_not(None))
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.first() is not None

    # ===== UPDATE OPERATIONS =====

    async def update(self, event: EvaluationEvent, update_data: dict) -> EvaluationEvent:
        for key, value in update_data.items():
            setattr(event, key, value)

        event.updated_at = utc_now()
        await self.session.commit()
        return await self.get_by_id(event.id)

    # ===== DELETE OPERATIONS =====

    async def delete_cascade(self, event_id: str) -> Dict[str, int]:
        """Hapus nilai -> penilaian -> snapshot -> event, urut sesuai dependensi."""
        evaluation_ids = select(Evaluation.id).where(Evaluation.event_id == event_id)

        scores = await self.session.execute(
            delete(EvaluationScore)
            .where(EvaluationScore.evaluation_id.in_(evaluation_ids))
            .execution_options(synchronize_session=False)
        )
        evaluations = await self.session.execute(
            delete(Evaluation)
            .where(Evaluation.event_id == event_id)
            .execution_options(synchronize_session=False)
        )
        snapshots = await self.session.execute(
            delete(IndicatorSnapshot)
            .where(IndicatorSnapshot.event_id == event_id)
            .execution_options(synchronize_session=False)
        )
        events = await self.session.execute(
            delete(EvaluationEvent)
            .where(EvaluationEvent.id == event_id)
            .execution_options(synchronize_session=False)
        )

        return {
            "scores": scores.rowcount,
            "evaluations": evaluations.rowcount,
            "snapshots": snapshots.rowcount,
            "events": events.rowcount,
        }
