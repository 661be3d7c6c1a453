"""
RolePermission Entity

Grants a permission to a role.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RolePermission(SQLModel, table=True):
    """
    RolePermission junction - grants a permission to a role.

    Business Rules:
    - (role_id, permission_id) is unique
    - Revocation sets is_active=False; a later grant reactivates the row
    - Counts only while junction, role and permission are all active
    """

    __tablename__ = "role_permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    role_id: UUID = Field(foreign_key="roles.id", nullable=False, index=True)
    permission_id: UUID = Field(foreign_key="permissions.id", nullable=False, index=True)

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_role_permission_unique", "role_id", "permission_id", unique=True),
    )
