"""
Permission Entity

Immutable catalog entry naming an action on a resource.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Permission(SQLModel, table=True):
    __tablename__ = "permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)  # e.g. CREATE_USER
    description: Optional[str] = Field(default=None, max_length=500)

    resource: Optional[str] = Field(default=None, max_length=50)  # e.g. USER
    action: Optional[str] = Field(default=None, max_length=50)  # e.g. CREATE

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_permission_resource", "resource"),)
