# ===== src/schemas/indicator.py =====
"""Schemas untuk indikator penilaian."""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

from src.models.enums import IndicatorCategory


class IndicatorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Nama indikator")
    category: IndicatorCategory = IndicatorCategory.HARD
    is_active: bool = True


class IndicatorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[IndicatorCategory] = None
    is_active: Optional[bool] = None


class IndicatorResponse(BaseModel):
    id: str
    name: str
    category: IndicatorCategory
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class IndicatorListResponse(BaseModel):
    indicators: List[IndicatorResponse]
