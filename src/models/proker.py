# ===== src/models/proker.py =====
"""Model untuk program kerja (proker) dan panitianya."""

from typing import TYPE_CHECKING, List, Optional
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy import UniqueConstraint

from src.models.base import BaseModel, generate_id

if TYPE_CHECKING:
    from src.models.period import Period
    from src.models.division import Division
    from src.models.user import User


class Proker(BaseModel, SQLModel, table=True):
    """Program kerja milik satu divisi dalam satu periode."""

    __tablename__ = "prokers"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    name: str = Field(max_length=200, index=True)
    division_id: str = Field(foreign_key="divisions.id", index=True, max_length=36)
    period_id: str = Field(foreign_key="periods.id", index=True, max_length=36)

    period: Optional["Period"] = Relationship(back_populates="prokers")
    division: Optional["Division"] = Relationship()
    panitia: List["Panitia"] = Relationship(back_populates="proker")

    def __repr__(self) -> str:
        return f"<Proker(name={self.name}, period_id={self.period_id})>"


class Panitia(BaseModel, SQLModel, table=True):
    """Keanggotaan panitia: user X adalah panitia proker Y."""

    __tablename__ = "panitia"
    __table_args__ = (
        UniqueConstraint("proker_id", "user_id", name="uq_panitia_proker_user"),
    )

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    proker_id: str = Field(foreign_key="prokers.id", index=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)

    proker: Optional[Proker] = Relationship(back_populates="panitia")
    user: Optional["User"] = Relationship()

    def __repr__(self) -> str:
        return f"<Panitia(proker_id={self.proker_id}, user_id={self.user_id})>"
