# ===== src/schemas/event.py =====
"""Schemas untuk event penilaian."""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from src.models.enums import EventType, IndicatorCategory
from src.schemas.common import SuccessResponse
from src.schemas.shared import BaseListResponse


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Semua timestamp disimpan sebagai UTC naive."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# ===== REQUEST SCHEMAS =====

class EventCreate(BaseModel):
    """Schema untuk create event + pilih indikator."""

    name: str = Field(..., min_length=1, max_length=200, description="Nama event")
    type: EventType
    period_id: str = Field(..., min_length=1)
    proker_id: Optional[str] = Field(None, description="Wajib untuk event PROKER")
    start_date: datetime
    end_date: datetime
    is_open: bool = True
    indicator_ids: List[str] = Field(..., min_length=1, description="Pilih minimal 1 indikator")

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, value: datetime) -> datetime:
        return _to_naive_utc(value)

    @field_validator('indicator_ids')
    @classmethod
    def validate_indicator_ids(cls, indicator_ids: List[str]) -> List[str]:
        if len(set(indicator_ids)) != len(indicator_ids):
            raise ValueError("Indikator tidak boleh duplikat")
        return indicator_ids

    @model_validator(mode="after")
    def validate_event(self) -> "EventCreate":
        if self.type == EventType.PROKER and not self.proker_id:
            raise ValueError("Proker wajib diisi untuk event PROKER")
        if self.type == EventType.PERIODIC:
            self.proker_id = None
        if self.start_date > self.end_date:
            raise ValueError("Tanggal mulai harus sebelum tanggal selesai")
        return self


class EventUpdate(BaseModel):
    """Nama/tanggal terkunci setelah ada penilaian yang disubmit; is_open selalu bisa diubah."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    is_open: Optional[bool] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(value)


# ===== RESPONSE SCHEMAS =====

class SnapshotResponse(BaseModel):
    """Indikator yang berlaku untuk event (id = id snapshot)."""
    id: str
    indicator_id: str
    name: str
    category: IndicatorCategory


class EventResponse(BaseModel):
    id: str
    name: str
    type: EventType
    period_id: str
    period_name: Optional[str] = None
    proker_id: Optional[str] = None
    proker_name: Optional[str] = None
    start_date: datetime
    end_date: datetime
    is_open: bool
    is_accepting_submissions: bool
    indicators: List[SnapshotResponse] = []

    # Statistics
    evaluation_count: int = 0
    submitted_count: int = 0
    is_locked: bool = Field(False, description="Nama/tanggal tidak bisa diubah lagi")

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventListResponse(BaseListResponse[EventResponse]):
    """Standardized event list response."""
    pass


class EventCreateResponse(SuccessResponse):
    """Response create event dengan ringkasan generate penugasan."""

    event: EventResponse
    assignment_summary: Dict[str, Any] = Field(
        description="Jumlah pasangan yang dihasilkan, dibuat, dan dilewati"
    )
