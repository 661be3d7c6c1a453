"""
Role Management DTOs

Commands and responses for role CRUD, role assignment and catalog seeding.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Role, RoleAssignment


# ============================================================================
# Command DTOs
# ============================================================================


class CreateRoleCommand(BaseModel):
    name: str
    description: Optional[str] = None
    is_default: bool = False


class UpdateRoleCommand(BaseModel):
    """Partial update; None leaves the field unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class AssignRoleCommand(BaseModel):
    user_id: UUID
    role_id: UUID
    reason: Optional[str] = None


class RevokeRoleCommand(BaseModel):
    user_id: UUID
    role_id: UUID
    reason: Optional[str] = None


class BulkAssignRolesCommand(BaseModel):
    user_ids: List[UUID]
    role_id: UUID
    reason: Optional[str] = None


class AuditContext(BaseModel):
    """Who performed an administrative action, and from where"""

    actor_id: Optional[UUID] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RoleResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    is_default: bool
    permissions: List[str] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_role(cls, role: Role, permissions: List[str]) -> "RoleResponse":
        return cls(
            id=str(role.id),
            name=role.name,
            description=role.description,
            is_active=role.is_active,
            is_default=role.is_default,
            permissions=permissions,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class MessageResponse(BaseModel):
    message: str


class BulkAssignFailure(BaseModel):
    user_id: str
    error: str


class BulkAssignResponse(BaseModel):
    success_count: int
    failures: List[BulkAssignFailure]


class UserAccessResponse(BaseModel):
    user_id: str
    email: str
    roles: List[str]
    permissions: List[str]


class RoleAssignmentResponse(BaseModel):
    id: str
    user_id: str
    role_id: str
    role_name: Optional[str] = None
    assigned_by: Optional[str] = None
    reason: Optional[str] = None
    is_active: bool
    revoked_by: Optional[str] = None
    revoke_reason: Optional[str] = None
    created_at: datetime
    revoked_at: Optional[datetime] = None

    @classmethod
    def from_assignment(
        cls, assignment: RoleAssignment, role_name: Optional[str]
    ) -> "RoleAssignmentResponse":
        return cls(
            id=str(assignment.id),
            user_id=str(assignment.user_id),
            role_id=str(assignment.role_id),
            role_name=role_name,
            assigned_by=str(assignment.assigned_by) if assignment.assigned_by else None,
            reason=assignment.reason,
            is_active=assignment.is_active,
            revoked_by=str(assignment.revoked_by) if assignment.revoked_by else None,
            revoke_reason=assignment.revoke_reason,
            created_at=assignment.created_at,
            revoked_at=assignment.revoked_at,
        )


class SeedCatalogResponse(BaseModel):
    permissions_created: int
    roles_created: int
    grants_created: int
