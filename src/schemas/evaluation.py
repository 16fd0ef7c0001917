# ===== src/schemas/evaluation.py =====
"""Schemas untuk pengisian penilaian."""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from src.models.enums import EventType, IndicatorCategory
from src.schemas.event import SnapshotResponse


class ScoreInput(BaseModel):
    indicator_snapshot_id: str = Field(..., min_length=1)
    score: int = Field(..., ge=1, le=5, description="Nilai 1-5")


class EvaluationSubmit(BaseModel):
    """Payload submit penilaian; harus mencakup tepat semua indikator event."""

    evaluation_id: str = Field(..., min_length=1)
    feedback: Optional[str] = Field("", max_length=5000)
    scores: List[ScoreInput] = Field(..., min_length=1, description="Minimal satu nilai")

    @field_validator('feedback', mode='before')
    @classmethod
    def feedback_default(cls, feedback: Optional[str]) -> str:
        return feedback or ""


class ScoreResponse(BaseModel):
    indicator_snapshot_id: str
    indicator_id: str
    indicator_name: str
    category: IndicatorCategory
    score: int


class EvaluateePreview(BaseModel):
    id: str
    name: str
    division_name: Optional[str] = None


class EvaluationResponse(BaseModel):
    """Penugasan milik penilai (dilihat oleh penilai sendiri)."""

    id: str
    event_id: str
    event_name: str
    event_type: EventType
    event_start_date: datetime
    event_end_date: datetime
    event_is_open: bool
    evaluatee: EvaluateePreview
    feedback: Optional[str] = None
    is_submitted: bool
    submitted_at: Optional[datetime] = None
    indicators: List[SnapshotResponse] = []
    scores: List[ScoreResponse] = []


class EvaluationListResponse(BaseModel):
    evaluations: List[EvaluationResponse]
    total: int
    submitted: int
    pending: int
