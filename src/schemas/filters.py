"""Filter schemas untuk list endpoints."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from src.models.enums import UserRole, EventType


class PaginationParams(BaseModel):
    page: int = Field(1, ge=1, description="Page number")
    size: int = Field(20, ge=1, le=100, description="Page size (max 100)")


class UserFilterParams(PaginationParams):
    """Schema for user filtering parameters."""

    search: Optional[str] = Field(None, description="Search by nama, NIM, email")
    role: Optional[UserRole] = Field(None, description="Filter by role")
    period_id: Optional[str] = Field(None, description="Filter by periode")
    division_id: Optional[str] = Field(None, description="Filter by divisi")
    is_active: Optional[bool] = Field(None, description="Filter by active status")

    @field_validator('search')
    @classmethod
    def validate_search(cls, search: Optional[str]) -> Optional[str]:
        """Validate and clean search term."""
        if search is not None:
            search = search.strip()
            if not search:
                return None
            if len(search) > 100:
                raise ValueError("Search term too long (max 100 characters)")
        return search


class ProkerFilterParams(PaginationParams):
    period_id: Optional[str] = Field(None, description="Filter by periode")
    division_id: Optional[str] = Field(None, description="Filter by divisi")


class EventFilterParams(PaginationParams):
    period_id: Optional[str] = Field(None, description="Filter by periode")
    type: Optional[EventType] = Field(None, description="PERIODIC atau PROKER")
    is_open: Optional[bool] = Field(None, description="Filter by status buka/tutup")
