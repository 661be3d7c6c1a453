"""
Authentication Use Cases

Session lifecycle: register, login, refresh, logout and request-time
principal validation.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .logout_all_use_case import LogoutAllUseCase
from .validate_principal_use_case import ValidatePrincipalUseCase
from .get_profile_use_case import GetProfileUseCase
from .record_session_activity_use_case import RecordSessionActivityUseCase
from .cleanup_sessions_use_case import CleanupSessionsUseCase
from .dtos import (
    RegisterCommand,
    AuthResponse,
    PrincipalSummary,
    LogoutResponse,
    LogoutAllResponse,
    SessionActivityResponse,
    ProfileResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllUseCase",
    "ValidatePrincipalUseCase",
    "GetProfileUseCase",
    "RecordSessionActivityUseCase",
    "CleanupSessionsUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "PrincipalSummary",
    "LogoutResponse",
    "LogoutAllResponse",
    "SessionActivityResponse",
    "ProfileResponse",
]
