"""
Authorization Kernel Domain Entities

Each entity in its own file.
"""

from .user import User
from .user_profile import UserProfile
from .role import Role
from .permission import Permission
from .role_permission import RolePermission
from .user_role import UserRole
from .role_assignment import RoleAssignment
from .session import Session
from .audit_log import AuditLog

__all__ = [
    "User",
    "UserProfile",
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "RoleAssignment",
    "Session",
    "AuditLog",
]
