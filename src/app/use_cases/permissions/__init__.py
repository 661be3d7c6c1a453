"""
Permission Catalog Use Cases
"""

from .create_permission_use_case import CreatePermissionUseCase
from .update_permission_use_case import UpdatePermissionUseCase
from .delete_permission_use_case import DeletePermissionUseCase
from .list_permissions_use_case import ListPermissionsUseCase
from .get_role_permissions_use_case import GetRolePermissionsUseCase
from .assign_permission_to_role_use_case import AssignPermissionToRoleUseCase
from .revoke_permission_from_role_use_case import RevokePermissionFromRoleUseCase
from .bulk_assign_permissions_use_case import BulkAssignPermissionsUseCase
from .check_permission_use_case import CheckPermissionUseCase
from .dtos import (
    CreatePermissionCommand,
    UpdatePermissionCommand,
    RolePermissionCommand,
    BulkAssignPermissionsCommand,
    PermissionResponse,
    RolePermissionsResponse,
    BulkAssignPermissionFailure,
    BulkAssignPermissionsResponse,
    PermissionCheckResponse,
)

__all__ = [
    "CreatePermissionUseCase",
    "UpdatePermissionUseCase",
    "DeletePermissionUseCase",
    "ListPermissionsUseCase",
    "GetRolePermissionsUseCase",
    "AssignPermissionToRoleUseCase",
    "RevokePermissionFromRoleUseCase",
    "BulkAssignPermissionsUseCase",
    "CheckPermissionUseCase",
    "CreatePermissionCommand",
    "UpdatePermissionCommand",
    "RolePermissionCommand",
    "BulkAssignPermissionsCommand",
    "PermissionResponse",
    "RolePermissionsResponse",
    "BulkAssignPermissionFailure",
    "BulkAssignPermissionsResponse",
    "PermissionCheckResponse",
]
