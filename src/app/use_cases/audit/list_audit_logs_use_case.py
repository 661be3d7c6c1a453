"""
List Audit Logs Use Case

Retrieves recent security audit entries, newest first.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditLog
from src.domain.result import Result, Return

MAX_LIMIT = 200


class AuditLogResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    action: str
    resource: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: AuditLog) -> "AuditLogResponse":
        return cls(
            id=str(entry.id),
            user_id=str(entry.user_id) if entry.user_id else None,
            action=entry.action,
            resource=entry.resource,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            details=entry.details,
            created_at=entry.created_at,
        )


class ListAuditLogsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: Optional[UUID] = None, limit: int = 50
    ) -> Result[List[AuditLogResponse]]:
        """
        Args:
            user_id: Only entries whose actor is this user
            limit: Page size, clamped to 1..200
        """
        limit = max(1, min(limit, MAX_LIMIT))
        async with self.uow:
            entries = await self.uow.audit_logs.list_recent(user_id=user_id, limit=limit)
            return Return.ok([AuditLogResponse.from_entry(e) for e in entries])
