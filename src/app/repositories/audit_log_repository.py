from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AuditLog


class IAuditLogRepository(ABC):
    """AuditLog repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AuditLog) -> AuditLog:
        """Append an audit entry (immutable)"""
        pass

    @abstractmethod
    async def list_recent(
        self, user_id: Optional[UUID] = None, limit: int = 50
    ) -> List[AuditLog]:
        """Most recent entries first, optionally for one actor"""
        pass
