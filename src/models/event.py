# ===== src/models/event.py =====
"""Model untuk event penilaian dan snapshot indikatornya."""

from typing import TYPE_CHECKING, List, Optional
from datetime import datetime
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import DateTime, Enum as SQLEnum, UniqueConstraint

from src.models.base import BaseModel, generate_id, utc_now
from src.models.enums import EventType

if TYPE_CHECKING:
    from src.models.period import Period
    from src.models.proker import Proker
    from src.models.indicator import Indicator


class EvaluationEvent(BaseModel, SQLModel, table=True):
    """Siklus penilaian dengan rentang waktu, PERIODIC atau PROKER."""

    __tablename__ = "evaluation_events"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    name: str = Field(max_length=200)
    type: EventType = Field(
        sa_column=Column(SQLEnum(EventType), nullable=False, index=True)
    )
    period_id: str = Field(foreign_key="periods.id", index=True, max_length=36)
    proker_id: Optional[str] = Field(
        default=None,
        foreign_key="prokers.id",
        index=True,
        max_length=36,
        description="Wajib untuk event PROKER"
    )

    start_date: datetime = Field(sa_type=DateTime, index=True)
    end_date: datetime = Field(sa_type=DateTime)
    is_open: bool = Field(default=True)

    period: Optional["Period"] = Relationship()
    proker: Optional["Proker"] = Relationship()
    snapshots: List["IndicatorSnapshot"] = Relationship(back_populates="event")

    def is_accepting_submissions(self, now: Optional[datetime] = None) -> bool:
        """Event terbuka DAN waktu sekarang di dalam [start_date, end_date]."""
        now = now or utc_now()
        return self.is_open and self.start_date <= now <= self.end_date

    def __repr__(self) -> str:
        return f"<EvaluationEvent(name={self.name}, type={self.type.value}, open={self.is_open})>"


class IndicatorSnapshot(SQLModel, table=True):
    """Indikator yang dipakai sebuah event, ditetapkan saat event dibuat."""

    __tablename__ = "indicator_snapshots"
    __table_args__ = (
        UniqueConstraint("event_id", "indicator_id", name="uq_snapshot_event_indicator"),
    )

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    event_id: str = Field(foreign_key="evaluation_events.id", index=True, max_length=36)
    indicator_id: str = Field(foreign_key="indicators.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    event: Optional[EvaluationEvent] = Relationship(back_populates="snapshots")
    indicator: Optional["Indicator"] = Relationship()

    def __repr__(self) -> str:
        return f"<IndicatorSnapshot(event_id={self.event_id}, indicator_id={self.indicator_id})>"
