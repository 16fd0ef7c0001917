# ===== src/models/period.py =====
"""Model untuk periode kepengurusan."""

from typing import TYPE_CHECKING, List
from sqlmodel import Field, Relationship, SQLModel

from src.models.base import BaseModel, generate_id

if TYPE_CHECKING:
    from src.models.user import User
    from src.models.proker import Proker


class Period(BaseModel, SQLModel, table=True):
    """Periode kepengurusan (mis. 2025/2026). Hanya satu yang aktif."""

    __tablename__ = "periods"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    name: str = Field(max_length=100, description="Nama periode, mis. 2025/2026")
    start_year: int = Field(index=True, description="Tahun mulai")
    end_year: int = Field(description="Tahun akhir")
    is_active: bool = Field(default=False, index=True)

    users: List["User"] = Relationship(back_populates="period")
    prokers: List["Proker"] = Relationship(back_populates="period")

    def __repr__(self) -> str:
        return f"<Period(name={self.name}, active={self.is_active})>"
