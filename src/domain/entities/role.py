"""
Role Entity

Named bundle of permissions assignable to users.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Role(SQLModel, table=True):
    """
    Role entity - named bundle of permissions.

    Business Rules:
    - Name is unique
    - At most one role has is_default=True system-wide
    - Soft deleted via is_active=False, never removed
    - Only counts toward a user while the role itself is active
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    is_active: bool = Field(default=True)
    is_default: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_role_is_default", "is_default"),)
