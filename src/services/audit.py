# ===== src/services/audit.py =====
"""Audit log best-effort untuk aktivitas autentikasi."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from src.repositories.audit_log import AuditLogRepository
from src.schemas.audit_log import AuditLogCreate

logger = logging.getLogger(__name__)

# Action names
LOGIN_SUCCESS = "LOGIN_SUCCESS"
LOGIN_FAILED = "LOGIN_FAILED"
LOGIN_RATE_LIMITED = "LOGIN_RATE_LIMITED"
LOGOUT = "LOGOUT"
PASSWORD_CHANGED = "PASSWORD_CHANGED"


class AuditService:
    """Penulisan audit log tidak boleh menggagalkan flow utama."""

    def __init__(self, audit_repo: AuditLogRepository):
        self.audit_repo = audit_repo

    async def log(
        self,
        action: str,
        success: bool,
        user_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        extra_data: Optional[Dict[str, Any]] = None
    ) -> None:
        try:
            await self.audit_repo.create(
                AuditLogCreate(
                    action=action,
                    user_id=user_id,
                    success=success,
                    ip_address=ip_address[:45] if ip_address else None,
                    user_agent=user_agent[:500] if user_agent else None,
                    extra_data=extra_data,
                )
            )
        except SQLAlchemyError as e:
            await self.audit_repo.session.rollback()
            logger.error(f"Failed to write audit log {action}: {e}")
