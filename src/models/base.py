"""Base model with common fields."""

from datetime import datetime, timezone
from typing import Optional
import uuid as uuid_lib

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def generate_id() -> str:
    """UUID string untuk primary key."""
    return str(uuid_lib.uuid4())


def utc_now() -> datetime:
    """Waktu sekarang sebagai UTC naive (format penyimpanan semua timestamp)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin(SQLModel):
    """Mixin for timestamp fields. Kolom DateTime eksplisit tanpa timezone."""
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime)


class BaseModel(TimestampMixin):
    """Base model with all common fields."""
    pass
