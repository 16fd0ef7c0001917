# ===== src/schemas/period.py =====
"""Schemas untuk periode kepengurusan."""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator
from datetime import datetime


class PeriodCreate(BaseModel):
    """Schema untuk create periode."""

    name: str = Field(..., min_length=1, max_length=100, description="Nama periode")
    start_year: int = Field(..., ge=2000, le=2100)
    end_year: int = Field(..., ge=2000, le=2100)
    is_active: bool = Field(False, description="Aktifkan periode ini (menonaktifkan yang lain)")

    @model_validator(mode="after")
    def validate_years(self) -> "PeriodCreate":
        if self.start_year > self.end_year:
            raise ValueError("Tahun mulai harus lebih kecil atau sama dengan tahun akhir")
        return self


class PeriodUpdate(BaseModel):
    """Schema untuk update periode."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    start_year: Optional[int] = Field(None, ge=2000, le=2100)
    end_year: Optional[int] = Field(None, ge=2000, le=2100)
    is_active: Optional[bool] = None


class PeriodResponse(BaseModel):
    id: str
    name: str
    start_year: int
    end_year: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PeriodListResponse(BaseModel):
    periods: List[PeriodResponse]
