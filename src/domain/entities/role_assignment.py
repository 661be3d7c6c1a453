"""
RoleAssignment Entity

Append-style history of role grants and revocations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RoleAssignment(SQLModel, table=True):
    """
    RoleAssignment entity - one record per grant of a role to a user.

    Business Rules:
    - One open (is_active=True) record per currently held (user_id, role_id)
    - Revocation closes the record (revoked_by, revoke_reason, revoked_at)
    - Records are never deleted
    """

    __tablename__ = "role_assignments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    role_id: UUID = Field(foreign_key="roles.id", nullable=False, index=True)

    assigned_by: Optional[UUID] = Field(default=None)
    reason: Optional[str] = Field(default=None, max_length=500)

    is_active: bool = Field(default=True)

    revoked_by: Optional[UUID] = Field(default=None)
    revoke_reason: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_role_assignment_user_role", "user_id", "role_id", "is_active"),
    )
