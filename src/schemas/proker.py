# ===== src/schemas/proker.py =====
"""Schemas untuk program kerja dan panitia."""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

from src.schemas.user import UserSummary


class ProkerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Nama proker")
    division_id: str = Field(..., min_length=1)
    period_id: str = Field(..., min_length=1)


class ProkerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    division_id: Optional[str] = Field(None, min_length=1)
    period_id: Optional[str] = Field(None, min_length=1)


class PanitiaAdd(BaseModel):
    user_id: str = Field(..., min_length=1)


class ProkerResponse(BaseModel):
    id: str
    name: str
    division_id: str
    division_name: Optional[str] = None
    period_id: str
    period_name: Optional[str] = None
    panitia: List[UserSummary] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_proker_model(cls, proker) -> "ProkerResponse":
        """Relasi division/period/panitia.user harus sudah di-load."""
        return cls(
            id=proker.id,
            name=proker.name,
            division_id=proker.division_id,
            division_name=proker.division.name if proker.division else None,
            period_id=proker.period_id,
            period_name=proker.period.name if proker.period else None,
            panitia=[UserSummary.model_validate(p.user) for p in proker.panitia if p.user],
            created_at=proker.created_at,
        )


class ProkerListResponse(BaseModel):
    prokers: List[ProkerResponse]
