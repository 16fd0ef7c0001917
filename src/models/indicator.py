# ===== src/models/indicator.py =====
"""Model untuk indikator penilaian."""

from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Enum as SQLEnum

from src.models.base import BaseModel, generate_id
from src.models.enums import IndicatorCategory


class Indicator(BaseModel, SQLModel, table=True):
    """Kriteria penilaian. Perubahan tidak mempengaruhi event yang sudah dibuat."""

    __tablename__ = "indicators"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    name: str = Field(max_length=200, index=True)
    category: IndicatorCategory = Field(
        default=IndicatorCategory.HARD,
        sa_column=Column(SQLEnum(IndicatorCategory), nullable=False, index=True),
    )
    is_active: bool = Field(default=True, index=True)

    def __repr__(self) -> str:
        return f"<Indicator(name={self.name}, category={self.category.value})>"
