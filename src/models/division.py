# ===== src/models/division.py =====
"""Model untuk divisi."""

from typing import TYPE_CHECKING, List
from sqlmodel import Field, Relationship, SQLModel

from src.models.base import BaseModel, generate_id

if TYPE_CHECKING:
    from src.models.user import User


class Division(BaseModel, SQLModel, table=True):
    """Divisi organisasi, keanggotaan datar tanpa hirarki."""

    __tablename__ = "divisions"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    name: str = Field(max_length=100, unique=True, index=True)

    # Kadiv dari divisi dengan flag ini melihat laporan seluruh event (mis. PSDM)
    has_full_report_access: bool = Field(
        default=False,
        description="Kadiv divisi ini boleh melihat hasil penilaian semua divisi"
    )

    users: List["User"] = Relationship(back_populates="division")

    def __repr__(self) -> str:
        return f"<Division(name={self.name}, full_report_access={self.has_full_report_access})>"
