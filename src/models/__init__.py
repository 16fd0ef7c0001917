# ===== src/models/__init__.py =====
"""Models initialization - semua table penilaian anggota."""

from .base import BaseModel, TimestampMixin
from .enums import UserRole, EventType, IndicatorCategory

from .period import Period
from .division import Division
from .user import User
from .proker import Proker, Panitia
from .indicator import Indicator
from .event import EvaluationEvent, IndicatorSnapshot
from .evaluation import Evaluation, EvaluationScore
from .audit_log import AuditLog

__all__ = [
    # Base classes
    "BaseModel",
    "TimestampMixin",

    # Enums
    "UserRole",
    "EventType",
    "IndicatorCategory",

    # Master data
    "Period",
    "Division",
    "User",
    "Proker",
    "Panitia",
    "Indicator",

    # Penilaian
    "EvaluationEvent",
    "IndicatorSnapshot",
    "Evaluation",
    "EvaluationScore",

    "AuditLog",
]

# ===== TABLE CREATION ORDER =====

"""
Urutan table berdasarkan foreign key dependencies:

1. periods, divisions, indicators (no dependencies)
2. users (periods, divisions)
3. prokers (periods, divisions)
4. panitia (prokers, users)            UNIQUE (proker_id, user_id)
5. evaluation_events (periods, prokers)
6. indicator_snapshots (events, indicators)   UNIQUE (event_id, indicator_id)
7. evaluations (events, users)         UNIQUE (evaluator_id, evaluatee_id, event_id)
8. evaluation_scores (evaluations, snapshots) UNIQUE (evaluation_id, indicator_snapshot_id)
9. audit_logs (no FK, user_id boleh NULL)

Delete event harus mengikuti urutan terbalik: scores -> evaluations -> snapshots -> event.
"""
