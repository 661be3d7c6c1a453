"""
Session Entity

Durable record of a refresh token issued to one device.
"""

import hashlib
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one refresh token per login, device or rotation.

    Business Rules:
    - Refresh token stored as SHA-256 hex digest, unique
    - Live iff not revoked and expires_at is in the future
    - ACTIVE -> REVOKED and ACTIVE -> EXPIRED are terminal
    - A user may hold many live sessions (multi-device)
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token_hash: str = Field(unique=True, index=True, max_length=64)
    is_revoked: bool = Field(default=False)

    user_agent: Optional[str] = Field(default=None, max_length=500)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_revoked", "user_id", "is_revoked"),
    )

    @staticmethod
    def hash_token(refresh_token: str) -> str:
        return hashlib.sha256(refresh_token.encode("utf-8")).hexdigest()
