# ===== src/repositories/audit_log.py =====
"""Repository untuk audit log."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.models.audit_log import AuditLog
from src.schemas.audit_log import AuditLogCreate


class AuditLogRepository:
    """Repository untuk operasi audit log."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, log_data: AuditLogCreate) -> AuditLog:
        audit_log = AuditLog(**log_data.model_dump())
        self.session.add(audit_log)
        await self.session.commit()
        return audit_log
