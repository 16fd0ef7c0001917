# ===== src/schemas/report.py =====
"""Schemas untuk laporan hasil penilaian event."""

from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from src.models.enums import EventType


class ReportIndicator(BaseModel):
    id: str
    name: str
    category: str


class ReportEventSummary(BaseModel):
    id: str
    name: str
    type: EventType
    period: str
    proker: Optional[str] = None
    start_date: datetime
    end_date: datetime
    indicators: List[ReportIndicator]


class IndicatorAverage(BaseModel):
    id: str
    name: str
    category: str
    avg: float


class EvaluateeResult(BaseModel):
    """Hasil satu evaluatee. Tidak memuat identitas penilai."""

    evaluatee_id: str
    name: str
    division: Optional[str] = None
    rater_count: int
    overall_avg: float
    category_avg: Dict[str, float] = Field(
        description="Jumlah nilai mentah per kategori dibagi jumlah penilai"
    )
    indicators: List[IndicatorAverage]
    feedback: List[str] = Field(description="Feedback anonim")


class ReportStats(BaseModel):
    total_assignments: int
    submitted_count: int
    evaluator_count: int
    evaluatee_count: int


class EventReport(BaseModel):
    event: ReportEventSummary
    results: List[EvaluateeResult]
    stats: ReportStats
