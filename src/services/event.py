# ===== src/services/event.py =====
"""Service untuk event penilaian: create + generate penugasan, update, hapus."""

import logging
from typing import Any, Dict, Optional, Tuple

from src.core.config import settings
from src.core.exceptions import NotFoundError, InvalidInputError, StateConflictError
from src.models.event import EvaluationEvent
from src.models.enums import EventType
from src.repositories.event import EventRepository
from src.repositories.evaluation import EvaluationRepository
from src.repositories.indicator import IndicatorRepository
from src.repositories.period import PeriodRepository
from src.repositories.proker import ProkerRepository
from src.repositories.user import UserRepository
from src.schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventListResponse,
    EventCreateResponse, SnapshotResponse
)
from src.schemas.filters import EventFilterParams
from src.schemas.common import SuccessResponse
from src.utils.assignment_generator import RosterEntry, build_pairs

logger = logging.getLogger(__name__)

# Field yang terkunci setelah ada penilaian tersubmit
LOCKED_FIELDS = ("name", "start_date", "end_date")


class EventService:
    """Service untuk operasi event penilaian."""

    def __init__(
        self,
        event_repo: EventRepository,
        evaluation_repo: EvaluationRepository,
        indicator_repo: IndicatorRepository,
        proker_repo: ProkerRepository,
        user_repo: UserRepository,
        period_repo: PeriodRepository
    ):
        self.event_repo = event_repo
        self.evaluation_repo = evaluation_repo
        self.indicator_repo = indicator_repo
        self.proker_repo = proker_repo
        self.user_repo = user_repo
        self.period_repo = period_repo
        self.session = event_repo.session

    # ===== HELPERS =====

    async def _get_or_404(self, event_id: str) -> EvaluationEvent:
        event = await self.event_repo.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event tidak ditemukan")
        return event

    def _to_response(self, event: EvaluationEvent, counts: Tuple[int, int] = (0, 0)) -> EventResponse:
        total, submitted = counts
        snapshots = sorted(
            (s for s in event.snapshots if s.indicator),
            key=lambda s: (s.indicator.category.value, s.indicator.name)
        )
        return EventResponse(
            id=event.id,
            name=event.name,
            type=event.type,
            period_id=event.period_id,
            period_name=event.period.name if event.period else None,
            proker_id=event.proker_id,
            proker_name=event.proker.name if event.proker else None,
            start_date=event.start_date,
            end_date=event.end_date,
            is_open=event.is_open,
            is_accepting_submissions=event.is_accepting_submissions(),
            indicators=[
                SnapshotResponse(
                    id=s.id,
                    indicator_id=s.indicator_id,
                    name=s.indicator.name,
                    category=s.indicator.category,
                )
                for s in snapshots
            ],
            evaluation_count=total,
            submitted_count=submitted,
            is_locked=submitted > 0,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    async def _build_response(self, event: EvaluationEvent) -> EventResponse:
        counts = await self.event_repo.get_evaluation_counts([event.id])
        return self._to_response(event, counts.get(event.id, (0, 0)))

    # ===== ASSIGNMENT GENERATION =====

    async def generate_assignments(self, event: EvaluationEvent) -> Dict[str, int]:
        """Muat roster sesuai tipe event lalu insert penugasan (duplikat dilewati).

        Tidak commit; dipanggil di dalam transaksi create/regenerate.
        """
        period_roster = []
        committee_roster = []

        if event.type == EventType.PERIODIC:
            users = await self.user_repo.get_active_by_period(event.period_id)
            period_roster = [RosterEntry(u.id, u.role, u.division_id) for u in users]
        else:
            members = await self.proker_repo.get_active_committee(event.proker_id, event.period_id)
            committee_roster = [RosterEntry(u.id, u.role, u.division_id) for u in members]

        pairs = build_pairs(
            event.type,
            period_roster=period_roster,
            committee_roster=committee_roster,
            admin_as_bpi=settings.ADMIN_JOINS_PERIODIC_EVALUATION,
        )
        created = await self.evaluation_repo.bulk_create_pairs(event.id, pairs)

        return {
            "generated": len(pairs),
            "created": created,
            "skipped": len(pairs) - created,
        }

    # ===== CRUD =====

    async def list_events(self, filters: EventFilterParams) -> EventListResponse:
        events, total = await self.event_repo.get_all_filtered(filters)
        counts = await self.event_repo.get_evaluation_counts([e.id for e in events])
        return EventListResponse.create(
            items=[self._to_response(e, counts.get(e.id, (0, 0))) for e in events],
            total=total,
            page=filters.page,
            size=filters.size
        )

    async def get_event(self, event_id: str) -> EventResponse:
        return await self._build_response(await self._get_or_404(event_id))

    async def create_event(self, event_data: EventCreate) -> EventCreateResponse:
        """Create event + snapshot indikator + penugasan dalam satu transaksi."""
        if event_data.start_date > event_data.end_date:
            raise InvalidInputError("Tanggal mulai harus sebelum tanggal selesai")

        if not await self.period_repo.get_by_id(event_data.period_id):
            raise InvalidInputError("Periode tidak ditemukan")

        requested_ids = list(event_data.indicator_ids)
        if len(set(requested_ids)) != len(requested_ids):
            raise InvalidInputError("Indikator tidak boleh duplikat")

        indicators = await self.indicator_repo.get_active_by_ids(requested_ids)
        found_ids = {indicator.id for indicator in indicators}
        missing = [indicator_id for indicator_id in requested_ids if indicator_id not in found_ids]
        if missing:
            raise InvalidInputError(
                "Indikator tidak ditemukan atau tidak aktif",
                details={"indicator_ids": missing}
            )

        proker_id: Optional[str] = None
        if event_data.type == EventType.PROKER:
            proker = await self.proker_repo.get_by_id(event_data.proker_id)
            if not proker:
                raise InvalidInputError("Proker tidak ditemukan")
            if proker.period_id != event_data.period_id:
                raise StateConflictError("Proker harus berada di periode yang sama dengan event")
            proker_id = proker.id

        try:
            event = await self.event_repo.add(
                EvaluationEvent(
                    name=event_data.name,
                    type=event_data.type,
                    period_id=event_data.period_id,
                    proker_id=proker_id,
                    start_date=event_data.start_date,
                    end_date=event_data.end_date,
                    is_open=event_data.is_open,
                )
            )
            await self.event_repo.add_snapshots(event.id, requested_ids)
            summary = await self.generate_assignments(event)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(f"Failed to create event '{event_data.name}', transaction rolled back")
            raise

        logger.info(
            f"Event created: {event.name} ({event.type.value}) with {len(requested_ids)} indicators, "
            f"assignments generated={summary['generated']} created={summary['created']} "
            f"skipped={summary['skipped']}"
        )

        event = await self.event_repo.get_by_id(event.id)
        return EventCreateResponse(
            message="Event berhasil dibuat",
            event=await self._build_response(event),
            assignment_summary=summary,
        )

    async def regenerate_assignments(self, event_id: str) -> SuccessResponse:
        """Jalankan ulang generator untuk event yang sudah ada (idempotent)."""
        event = await self._get_or_404(event_id)

        try:
            summary = await self.generate_assignments(event)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            f"Assignments regenerated for event {event.id}: generated={summary['generated']} "
            f"created={summary['created']} skipped={summary['skipped']}"
        )
        return SuccessResponse(message="Penugasan berhasil digenerate ulang", data=summary)

    async def update_event(self, event_id: str, event_data: EventUpdate) -> EventResponse:
        """Update event; nama/tanggal terkunci setelah ada submit, is_open selalu boleh."""
        event = await self._get_or_404(event_id)
        update_data: Dict[str, Any] = event_data.model_dump(exclude_unset=True)

        # None pada field wajib berarti tidak diubah
        update_data = {key: value for key, value in update_data.items() if value is not None}

        changed_locked = [
            field for field in LOCKED_FIELDS
            if field in update_data and update_data[field] != getattr(event, field)
        ]
        if changed_locked and await self.event_repo.has_submissions(event_id):
            raise StateConflictError(
                "Event sudah memiliki penilaian yang disubmit; nama dan tanggal tidak bisa diubah",
                details={"locked_fields": changed_locked}
            )

        start_date = update_data.get("start_date", event.start_date)
        end_date = update_data.get("end_date", event.end_date)
        if start_date > end_date:
            raise InvalidInputError("Tanggal mulai harus sebelum tanggal selesai")

        event = await self.event_repo.update(event, update_data)
        return await self._build_response(event)

    async def delete_event(self, event_id: str) -> SuccessResponse:
        """Hapus event beserta nilai, penugasan, dan snapshot-nya dalam satu transaksi."""
        event = await self._get_or_404(event_id)

        try:
            deleted = await self.event_repo.delete_cascade(event_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(f"Failed to delete event {event_id}, transaction rolled back")
            raise

        logger.info(
            f"Event deleted: {event.name} (scores={deleted['scores']}, "
            f"evaluations={deleted['evaluations']}, snapshots={deleted['snapshots']})"
        )
        return SuccessResponse(message=f"Event {event.name} berhasil dihapus", data=deleted)
