from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.access import audit_context, require
from src.app.services.authorization import ADMIN_ONLY, ADMIN_OR_INVESTOR, AUTHENTICATED
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles import (
    AssignRoleCommand,
    AssignRoleUseCase,
    BulkAssignResponse,
    BulkAssignRolesCommand,
    BulkAssignRolesUseCase,
    CreateRoleCommand,
    CreateRoleUseCase,
    DeleteRoleUseCase,
    GetDefaultRoleUseCase,
    GetRoleAssignmentHistoryUseCase,
    GetRoleUseCase,
    GetUserAccessUseCase,
    GetUsersWithRoleUseCase,
    ListRolesUseCase,
    MessageResponse,
    RevokeRoleCommand,
    RevokeRoleUseCase,
    RoleAssignmentResponse,
    RoleResponse,
    UpdateRoleCommand,
    UpdateRoleUseCase,
    UserAccessResponse,
)
from src.depends import get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/roles", tags=["Roles"])


class CreateRoleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_default: bool = False


class UpdateRoleRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class UserRoleRequest(BaseModel):
    user_id: UUID
    role_id: UUID
    reason: Optional[str] = Field(None, max_length=500)


class BulkAssignRolesRequest(BaseModel):
    user_ids: List[UUID] = Field(..., min_length=1)
    role_id: UUID
    reason: Optional[str] = Field(None, max_length=500)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoleResponse)
async def create_role(
    request: CreateRoleRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a role.

    Raises:
        - 409 Conflict: Role name already exists
    """
    use_case = CreateRoleUseCase(uow)
    result = await use_case.execute(
        CreateRoleCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[RoleResponse])
async def list_roles(
    include_inactive: bool = Query(False),
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListRolesUseCase(uow).execute(include_inactive=include_inactive)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/default", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def get_default_role(
    principal: Principal = Depends(require(ADMIN_OR_INVESTOR)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetDefaultRoleUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserAccessResponse)
async def get_my_access(
    principal: Principal = Depends(require(AUTHENTICATED)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Roles and permissions of the caller"""
    result = await GetUserAccessUseCase(uow).execute(principal.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/user/{user_id}", status_code=status.HTTP_200_OK, response_model=UserAccessResponse
)
async def get_user_access(
    user_id: UUID,
    principal: Principal = Depends(require(ADMIN_OR_INVESTOR)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetUserAccessUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/history/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=List[RoleAssignmentResponse],
)
async def get_role_assignment_history(
    user_id: UUID,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetRoleAssignmentHistoryUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/assign", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def assign_role(
    request: UserRoleRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign a role to a user.

    Raises:
        - 404 Not Found: User or role not found
        - 409 Conflict: User already has this role
    """
    result = await AssignRoleUseCase(uow).execute(
        AssignRoleCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/revoke", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def revoke_role(
    request: UserRoleRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke a role from a user.

    Raises:
        - 404 Not Found: User does not have this role
    """
    result = await RevokeRoleUseCase(uow).execute(
        RevokeRoleCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/bulk-assign", status_code=status.HTTP_200_OK, response_model=BulkAssignResponse
)
async def bulk_assign_roles(
    request: BulkAssignRolesRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Assign one role to many users; per-user failures are reported, not raised"""
    result = await BulkAssignRolesUseCase(uow).execute(
        BulkAssignRolesCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def get_role(
    role_id: UUID,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetRoleUseCase(uow).execute(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{role_id}/users",
    status_code=status.HTTP_200_OK,
    response_model=List[UserAccessResponse],
)
async def get_users_with_role(
    role_id: UUID,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Active holders of a role with their effective access"""
    result = await GetUsersWithRoleUseCase(uow).execute(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    request: UpdateRoleRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a role.

    Raises:
        - 404 Not Found: Role not found
        - 409 Conflict: Role name already exists
    """
    result = await UpdateRoleUseCase(uow).execute(
        role_id,
        UpdateRoleCommand(**request.model_dump(exclude_unset=True)),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: UUID,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Soft delete a role.

    Raises:
        - 400 Bad Request: Default role, or role still held by users
        - 404 Not Found: Role not found
    """
    result = await DeleteRoleUseCase(uow).execute(
        role_id, audit_context(http_request, principal)
    )
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
