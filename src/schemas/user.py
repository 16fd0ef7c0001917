# ===== src/schemas/user.py =====
"""Schemas untuk user."""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from datetime import datetime

from src.models.enums import UserRole
from src.schemas.shared import BaseListResponse


def _blank_to_none(value):
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class UserCreate(BaseModel):
    """Schema untuk create user."""

    nim: str = Field(..., min_length=3, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    role: UserRole
    period_id: str = Field(..., min_length=1)
    division_id: Optional[str] = None
    password: str = Field(..., min_length=6, max_length=128)
    is_active: bool = True

    @field_validator('email', 'division_id', mode='before')
    @classmethod
    def empty_string_as_none(cls, value):
        return _blank_to_none(value)

    @field_validator('nim', 'name')
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class UserUpdate(BaseModel):
    """Schema untuk update user. Password kosong = tidak diubah."""

    nim: Optional[str] = Field(None, min_length=3, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    period_id: Optional[str] = None
    division_id: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    is_active: Optional[bool] = None

    @field_validator('email', 'division_id', 'password', mode='before')
    @classmethod
    def empty_string_as_none(cls, value):
        return _blank_to_none(value)


class UserResponse(BaseModel):
    id: str
    nim: str
    name: str
    email: Optional[str] = None
    role: UserRole
    role_display: str
    period_id: str
    period_name: Optional[str] = None
    division_id: Optional[str] = None
    division_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_user_model(cls, user) -> "UserResponse":
        """Build response; relasi period/division harus sudah di-load."""
        period = getattr(user, "period", None)
        division = getattr(user, "division", None)
        return cls(
            id=user.id,
            nim=user.nim,
            name=user.name,
            email=user.email,
            role=user.role,
            role_display=user.get_role_display(),
            period_id=user.period_id,
            period_name=period.name if period else None,
            division_id=user.division_id,
            division_name=division.name if division else None,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserListResponse(BaseListResponse[UserResponse]):
    """Standardized user list response."""
    pass


class UserSummary(BaseModel):
    """Ringkasan user untuk ditampilkan di proker/penilaian."""
    id: str
    nim: str
    name: str
    role: UserRole
    division_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
