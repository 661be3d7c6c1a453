"""
AuditLog Entity

Immutable log of security-relevant events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditLog(SQLModel, table=True):
    """
    AuditLog entity - append-only record of authentication and RBAC events.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id is the actor (the admin for role changes)
    - details stores additional context (target user, role name, reason)
    """

    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g. LOGIN, ROLE_ASSIGNED
    resource: Optional[str] = Field(default=None, max_length=50)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=500)
    details: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_action", "action"),
    )
