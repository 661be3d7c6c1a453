"""
UserRole Entity

Current holding of a role by a user.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class UserRole(SQLModel, table=True):
    """
    UserRole junction - a role currently (or formerly) held by a user.

    Business Rules:
    - (user_id, role_id) is unique
    - Revocation sets is_active=False; re-assignment reactivates the row
    - Counts only while junction and role are both active
    """

    __tablename__ = "user_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    role_id: UUID = Field(foreign_key="roles.id", nullable=False, index=True)

    is_active: bool = Field(default=True)

    assigned_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_role_unique", "user_id", "role_id", unique=True),
    )
