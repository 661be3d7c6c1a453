from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.access import audit_context, require
from src.app.services.authorization import ADMIN_ONLY, ADMIN_OR_INVESTOR, AUTHENTICATED
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.permissions import (
    AssignPermissionToRoleUseCase,
    BulkAssignPermissionsCommand,
    BulkAssignPermissionsResponse,
    BulkAssignPermissionsUseCase,
    CheckPermissionUseCase,
    CreatePermissionCommand,
    CreatePermissionUseCase,
    DeletePermissionUseCase,
    GetRolePermissionsUseCase,
    ListPermissionsUseCase,
    PermissionCheckResponse,
    PermissionResponse,
    RevokePermissionFromRoleUseCase,
    RolePermissionCommand,
    RolePermissionsResponse,
    UpdatePermissionCommand,
    UpdatePermissionUseCase,
)
from src.app.use_cases.roles import MessageResponse
from src.depends import get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/permissions", tags=["Permissions"])


class CreatePermissionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    resource: Optional[str] = Field(None, max_length=50)
    action: Optional[str] = Field(None, max_length=50)


class UpdatePermissionRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    resource: Optional[str] = Field(None, max_length=50)
    action: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None


class RolePermissionRequest(BaseModel):
    role_id: UUID
    permission_id: UUID


class BulkAssignPermissionsRequest(BaseModel):
    role_id: UUID
    permission_ids: List[UUID] = Field(..., min_length=1)


class CheckPermissionRequest(BaseModel):
    permission: str = Field(..., min_length=1, max_length=100)


class MyPermissionsResponse(BaseModel):
    roles: List[str]
    permissions: List[str]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PermissionResponse)
async def create_permission(
    request: CreatePermissionRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add a permission to the catalog.

    Raises:
        - 409 Conflict: Permission name already exists
    """
    result = await CreatePermissionUseCase(uow).execute(
        CreatePermissionCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[PermissionResponse])
async def list_permissions(
    resource: Optional[str] = Query(None),
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListPermissionsUseCase(uow).execute(resource=resource)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MyPermissionsResponse)
async def my_permissions(principal: Principal = Depends(require(AUTHENTICATED))):
    """Effective access of the caller, as resolved for this request"""
    return MyPermissionsResponse(
        roles=sorted(principal.roles), permissions=sorted(principal.permissions)
    )


@router.get(
    "/role/{role_id}",
    status_code=status.HTTP_200_OK,
    response_model=RolePermissionsResponse,
)
async def get_role_permissions(
    role_id: UUID,
    principal: Principal = Depends(require(ADMIN_OR_INVESTOR)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetRolePermissionsUseCase(uow).execute(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/check/me", status_code=status.HTTP_200_OK, response_model=PermissionCheckResponse
)
async def check_my_permission(
    request: CheckPermissionRequest,
    principal: Principal = Depends(require(AUTHENTICATED)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CheckPermissionUseCase(uow).execute(principal.id, request.permission)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/check/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=PermissionCheckResponse,
)
async def check_user_permission(
    user_id: UUID,
    request: CheckPermissionRequest,
    principal: Principal = Depends(require(ADMIN_OR_INVESTOR)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Whether a user holds a permission, and which roles grant it.

    Raises:
        - 404 Not Found: User not found
    """
    result = await CheckPermissionUseCase(uow).execute(user_id, request.permission)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/assign", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def assign_permission(
    request: RolePermissionRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant a permission to a role.

    Raises:
        - 404 Not Found: Role or permission not found
        - 409 Conflict: Role already has this permission
    """
    result = await AssignPermissionToRoleUseCase(uow).execute(
        RolePermissionCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/revoke", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def revoke_permission(
    request: RolePermissionRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RevokePermissionFromRoleUseCase(uow).execute(
        RolePermissionCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/bulk-assign",
    status_code=status.HTTP_200_OK,
    response_model=BulkAssignPermissionsResponse,
)
async def bulk_assign_permissions(
    request: BulkAssignPermissionsRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Grant many permissions to one role; per-permission failures are reported"""
    result = await BulkAssignPermissionsUseCase(uow).execute(
        BulkAssignPermissionsCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/{permission_id}", status_code=status.HTTP_200_OK, response_model=PermissionResponse
)
async def update_permission(
    permission_id: UUID,
    request: UpdatePermissionRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a catalog entry.

    Raises:
        - 400 Bad Request: Deactivating a permission still granted to roles
        - 404 Not Found: Permission not found
        - 409 Conflict: Permission name already exists
    """
    result = await UpdatePermissionUseCase(uow).execute(
        permission_id,
        UpdatePermissionCommand(**request.model_dump(exclude_unset=True)),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{permission_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_permission(
    permission_id: UUID,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Soft delete a catalog entry.

    Raises:
        - 400 Bad Request: Permission still granted to roles
        - 404 Not Found: Permission not found
    """
    result = await DeletePermissionUseCase(uow).execute(
        permission_id, audit_context(http_request, principal)
    )
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
