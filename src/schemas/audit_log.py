# ===== src/schemas/audit_log.py =====
"""Schemas untuk audit log."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class AuditLogCreate(BaseModel):
    action: str = Field(..., max_length=50)
    user_id: Optional[str] = None
    success: bool
    ip_address: Optional[str] = Field(None, max_length=45)
    user_agent: Optional[str] = Field(None, max_length=500)
    extra_data: Optional[Dict[str, Any]] = None
