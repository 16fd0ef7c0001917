# ===== src/models/evaluation.py =====
"""Model untuk penugasan penilaian (evaluator -> evaluatee) dan nilainya."""

from typing import TYPE_CHECKING, List, Optional
from datetime import datetime
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy import CheckConstraint, DateTime, UniqueConstraint

from src.models.base import BaseModel, generate_id, utc_now

if TYPE_CHECKING:
    from src.models.user import User
    from src.models.event import EvaluationEvent, IndicatorSnapshot


class Evaluation(BaseModel, SQLModel, table=True):
    """Satu penugasan berarah dalam satu event."""

    __tablename__ = "evaluations"
    __table_args__ = (
        UniqueConstraint("evaluator_id", "evaluatee_id", "event_id", name="uq_evaluation_pair_event"),
        CheckConstraint("evaluator_id <> evaluatee_id", name="ck_evaluation_no_self"),
    )

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    event_id: str = Field(foreign_key="evaluation_events.id", index=True, max_length=36)
    evaluator_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    evaluatee_id: str = Field(foreign_key="users.id", index=True, max_length=36)

    feedback: Optional[str] = Field(default=None)
    # Diisi sekali saat submit; NULL = belum submit
    submitted_at: Optional[datetime] = Field(default=None, sa_type=DateTime, index=True)

    event: Optional["EvaluationEvent"] = Relationship()
    evaluator: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Evaluation.evaluator_id"}
    )
    evaluatee: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Evaluation.evaluatee_id"}
    )
    scores: List["EvaluationScore"] = Relationship(back_populates="evaluation")

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def __repr__(self) -> str:
        return (
            f"<Evaluation(event_id={self.event_id}, evaluator={self.evaluator_id}, "
            f"evaluatee={self.evaluatee_id}, submitted={self.is_submitted})>"
        )


class EvaluationScore(SQLModel, table=True):
    """Nilai 1-5 untuk satu snapshot indikator dalam satu penilaian."""

    __tablename__ = "evaluation_scores"
    __table_args__ = (
        UniqueConstraint("evaluation_id", "indicator_snapshot_id", name="uq_score_evaluation_snapshot"),
        CheckConstraint("score >= 1 AND score <= 5", name="ck_score_range"),
    )

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    evaluation_id: str = Field(foreign_key="evaluations.id", index=True, max_length=36)
    indicator_snapshot_id: str = Field(foreign_key="indicator_snapshots.id", index=True, max_length=36)
    score: int
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    evaluation: Optional[Evaluation] = Relationship(back_populates="scores")
    indicator_snapshot: Optional["IndicatorSnapshot"] = Relationship()

    def __repr__(self) -> str:
        return f"<EvaluationScore(evaluation_id={self.evaluation_id}, score={self.score})>"
