"""
User Administration DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UpdateUserStatusCommand(BaseModel):
    is_active: bool
    reason: Optional[str] = None


class UserStatusResponse(BaseModel):
    id: str
    email: str
    is_active: bool
    revoked_sessions: int = 0


class DeactivateUserResponse(BaseModel):
    message: str
    deactivated_at: datetime
    revoked_sessions: int
    revoked_roles: int
