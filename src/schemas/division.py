# ===== src/schemas/division.py =====
"""Schemas untuk divisi."""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime


class DivisionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Nama divisi")
    has_full_report_access: bool = Field(
        False,
        description="Kadiv divisi ini dapat melihat hasil penilaian semua divisi"
    )

    @field_validator('name')
    @classmethod
    def strip_name(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("Nama wajib diisi")
        return name


class DivisionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    has_full_report_access: Optional[bool] = None


class DivisionResponse(BaseModel):
    id: str
    name: str
    has_full_report_access: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DivisionListResponse(BaseModel):
    divisions: List[DivisionResponse]
