# ===== src/schemas/auth.py =====
"""Schemas untuk autentikasi."""

from pydantic import BaseModel, Field

from src.models.enums import UserRole


class UserLogin(BaseModel):
    nim: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)


class LoginResponse(BaseModel):
    """Token juga di-set sebagai HTTP-only cookie."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str
    role: UserRole
    period_id: str
    suggest_password_change: bool = False


class UserChangePassword(BaseModel):
    old_password: str = Field(..., min_length=6, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)
