"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the session lifecycle.
"""

from typing import List, Optional
from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Command for registering a new portal account"""

    email: str
    password: str
    first_name: str
    last_name: str
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PrincipalSummary(BaseModel):
    """User and effective access returned with every token pair"""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    roles: List[str]
    permissions: List[str]


class AuthResponse(BaseModel):
    """Response for register, login and refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: PrincipalSummary


class LogoutResponse(BaseModel):
    message: str


class LogoutAllResponse(BaseModel):
    message: str
    revoked_sessions: int


class SessionActivityResponse(BaseModel):
    updated: bool


class ProfileResponse(PrincipalSummary):
    is_active: bool
    is_verified: bool
