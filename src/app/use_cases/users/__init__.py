"""
User Administration Use Cases
"""

from .update_user_status_use_case import UpdateUserStatusUseCase
from .deactivate_user_use_case import DeactivateUserUseCase
from .dtos import DeactivateUserResponse, UpdateUserStatusCommand, UserStatusResponse

__all__ = [
    "UpdateUserStatusUseCase",
    "DeactivateUserUseCase",
    "UpdateUserStatusCommand",
    "UserStatusResponse",
    "DeactivateUserResponse",
]
