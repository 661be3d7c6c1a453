"""
Audit Emitter

Best-effort writer of security events. Called after the primary operation
has committed; an audit failure is logged and never reaches the caller.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditLog

logger = logging.getLogger(__name__)


class AuditAction:
    REGISTER = "REGISTER"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    LOGOUT_ALL = "LOGOUT_ALL"
    TOKEN_REFRESH = "TOKEN_REFRESH"
    ROLE_CREATED = "ROLE_CREATED"
    ROLE_UPDATED = "ROLE_UPDATED"
    ROLE_DELETED = "ROLE_DELETED"
    ROLE_ASSIGNED = "ROLE_ASSIGNED"
    ROLE_REVOKED = "ROLE_REVOKED"
    PERMISSION_CREATED = "PERMISSION_CREATED"
    PERMISSION_ASSIGNED = "PERMISSION_ASSIGNED"
    PERMISSION_REVOKED = "PERMISSION_REVOKED"
    PERMISSION_UPDATED = "PERMISSION_UPDATED"
    PERMISSION_DELETED = "PERMISSION_DELETED"
    USER_STATUS_CHANGED = "USER_STATUS_CHANGED"
    USER_DEACTIVATED = "USER_DEACTIVATED"


def build_audit_log(
    action: str,
    user_id: Optional[UUID],
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    resource: Optional[str] = None,
) -> AuditLog:
    return AuditLog(
        user_id=user_id,
        action=action,
        resource=resource,
        ip_address=ip_address,
        user_agent=user_agent,
        details=details,
    )


class AuditEmitter:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        action: str,
        user_id: Optional[UUID],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        resource: Optional[str] = None,
    ) -> None:
        """
        Append one audit entry in its own commit.

        Must be called inside an open ``async with uow`` block, after the
        primary operation committed.
        """
        entry = build_audit_log(
            action, user_id, ip_address, user_agent, details, resource
        )
        try:
            await self.uow.audit_logs.create(entry)
            await self.uow.commit()
        except Exception:
            logger.exception(f"Failed to record audit event {action} for user {user_id}")
            try:
                await self.uow.rollback()
            except Exception:
                logger.exception("Rollback after audit failure also failed")
