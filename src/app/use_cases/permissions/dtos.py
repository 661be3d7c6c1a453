"""
Permission Catalog DTOs
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Permission


class CreatePermissionCommand(BaseModel):
    name: str
    description: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None


class UpdatePermissionCommand(BaseModel):
    """Partial update; None leaves the field unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None
    is_active: Optional[bool] = None


class RolePermissionCommand(BaseModel):
    """Grant or revoke of one permission on one role"""

    role_id: UUID
    permission_id: UUID


class BulkAssignPermissionsCommand(BaseModel):
    role_id: UUID
    permission_ids: List[UUID]


class PermissionResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None
    is_active: bool
    created_at: datetime

    @classmethod
    def from_permission(cls, permission: Permission) -> "PermissionResponse":
        return cls(
            id=str(permission.id),
            name=permission.name,
            description=permission.description,
            resource=permission.resource,
            action=permission.action,
            is_active=permission.is_active,
            created_at=permission.created_at,
        )


class RolePermissionsResponse(BaseModel):
    role_id: str
    role_name: str
    is_active: bool
    permissions: List[PermissionResponse]


class BulkAssignPermissionFailure(BaseModel):
    permission_id: str
    error: str


class BulkAssignPermissionsResponse(BaseModel):
    success_count: int
    failures: List[BulkAssignPermissionFailure]


class PermissionCheckResponse(BaseModel):
    user_id: str
    permission: str
    has_permission: bool
    granted_by_roles: List[str]
