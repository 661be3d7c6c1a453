from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_log_repository import IAuditLogRepository
from src.domain.entities import AuditLog


class AuditLogRepository(IAuditLogRepository):
    """AuditLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditLog) -> AuditLog:
        """Append an audit entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def list_recent(
        self, user_id: Optional[UUID] = None, limit: int = 50
    ) -> List[AuditLog]:
        """Most recent entries first, optionally for one actor"""
        stmt = select(AuditLog)
        if user_id is not None:
            stmt = stmt.where(AuditLog.user_id == user_id)
        stmt = stmt.order_by(AuditLog.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())
