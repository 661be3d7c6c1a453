"""
Role Management Use Cases

Role CRUD, role assignment and catalog seeding.
"""

from .create_role_use_case import CreateRoleUseCase
from .update_role_use_case import UpdateRoleUseCase
from .delete_role_use_case import DeleteRoleUseCase
from .list_roles_use_case import ListRolesUseCase
from .get_role_use_case import GetRoleUseCase, GetDefaultRoleUseCase
from .assign_role_use_case import AssignRoleUseCase
from .revoke_role_use_case import RevokeRoleUseCase
from .bulk_assign_roles_use_case import BulkAssignRolesUseCase
from .get_user_access_use_case import GetUserAccessUseCase
from .get_users_with_role_use_case import GetUsersWithRoleUseCase
from .get_role_assignment_history_use_case import GetRoleAssignmentHistoryUseCase
from .seed_catalog_use_case import SeedCatalogUseCase
from .bootstrap_admin_use_case import BootstrapAdminUseCase
from .dtos import (
    AuditContext,
    CreateRoleCommand,
    UpdateRoleCommand,
    AssignRoleCommand,
    RevokeRoleCommand,
    BulkAssignRolesCommand,
    RoleResponse,
    MessageResponse,
    BulkAssignFailure,
    BulkAssignResponse,
    UserAccessResponse,
    RoleAssignmentResponse,
    SeedCatalogResponse,
)

__all__ = [
    # Use Cases
    "CreateRoleUseCase",
    "UpdateRoleUseCase",
    "DeleteRoleUseCase",
    "ListRolesUseCase",
    "GetRoleUseCase",
    "GetDefaultRoleUseCase",
    "AssignRoleUseCase",
    "RevokeRoleUseCase",
    "BulkAssignRolesUseCase",
    "GetUserAccessUseCase",
    "GetUsersWithRoleUseCase",
    "GetRoleAssignmentHistoryUseCase",
    "SeedCatalogUseCase",
    "BootstrapAdminUseCase",
    # DTOs - Commands
    "AuditContext",
    "CreateRoleCommand",
    "UpdateRoleCommand",
    "AssignRoleCommand",
    "RevokeRoleCommand",
    "BulkAssignRolesCommand",
    # DTOs - Responses
    "RoleResponse",
    "MessageResponse",
    "BulkAssignFailure",
    "BulkAssignResponse",
    "UserAccessResponse",
    "RoleAssignmentResponse",
    "SeedCatalogResponse",
]
