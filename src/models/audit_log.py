# ===== src/models/audit_log.py =====
"""Model untuk audit log login dan aksi sensitif."""

from typing import Any, Dict, Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel, Column, JSON

from src.models.base import generate_id, utc_now


class AuditLog(SQLModel, table=True):
    """Catatan best-effort untuk login, rate limit dan ganti password."""

    __tablename__ = "audit_logs"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=36)

    action: str = Field(max_length=50, index=True, description="login, login_rate_limited, change_password")
    user_id: Optional[str] = Field(default=None, index=True, max_length=36)
    success: bool = Field(default=False)
    ip_address: Optional[str] = Field(default=None, max_length=45)  # IPv6 support
    user_agent: Optional[str] = Field(default=None, max_length=500)
    extra_data: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)

    def __repr__(self) -> str:
        return f"<AuditLog(action={self.action}, user_id={self.user_id}, success={self.success})>"
