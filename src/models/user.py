"""User model - anggota organisasi dalam satu periode."""

from typing import TYPE_CHECKING, Optional
from datetime import datetime
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import DateTime, Enum as SQLEnum

from .base import BaseModel, generate_id
from .enums import UserRole

if TYPE_CHECKING:
    from .period import Period
    from .division import Division


class User(BaseModel, SQLModel, table=True):
    """User model, login menggunakan NIM."""

    __tablename__ = "users"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    # Identitas
    nim: str = Field(max_length=50, unique=True, index=True, description="NIM, dipakai untuk login")
    name: str = Field(max_length=200, index=True, description="Nama lengkap")
    email: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)

    # Authentication
    hashed_password: str = Field(description="Password yang sudah di-hash")
    password_updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    # Role - ENUM FIELD
    role: UserRole = Field(
        sa_column=Column(SQLEnum(UserRole), nullable=False, index=True),
        description="Role pengguna: ADMIN, BPI, KADIV, atau ANGGOTA"
    )

    # Keanggotaan
    period_id: str = Field(foreign_key="periods.id", index=True, max_length=36)
    division_id: Optional[str] = Field(default=None, foreign_key="divisions.id", index=True, max_length=36)

    # Status
    is_active: bool = Field(default=True, index=True)

    period: Optional["Period"] = Relationship(back_populates="users")
    division: Optional["Division"] = Relationship(back_populates="users")

    def has_changed_password(self) -> bool:
        """Password default belum pernah diganti jika timestamp kosong."""
        return self.password_updated_at is not None

    def get_role_display(self) -> str:
        """Get role display name."""
        role_display = {
            UserRole.ADMIN: "Administrator",
            UserRole.BPI: "Badan Pengurus Inti",
            UserRole.KADIV: "Kepala Divisi",
            UserRole.ANGGOTA: "Anggota",
        }
        return role_display.get(self.role, self.role.value)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, nim={self.nim}, name={self.name}, role={self.role.value})>"
