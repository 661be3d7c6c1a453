from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.access import audit_context, require
from src.app.services.authorization import ADMIN_ONLY
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    DeactivateUserResponse,
    DeactivateUserUseCase,
    UpdateUserStatusCommand,
    UpdateUserStatusUseCase,
    UserStatusResponse,
)
from src.depends import get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/users", tags=["Users"])


class UpdateUserStatusRequest(BaseModel):
    is_active: bool
    reason: Optional[str] = Field(None, max_length=500)


@router.patch(
    "/{user_id}/status", status_code=status.HTTP_200_OK, response_model=UserStatusResponse
)
async def update_user_status(
    user_id: UUID,
    request: UpdateUserStatusRequest,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate or deactivate an account. Deactivation revokes every session.

    Raises:
        - 400 Bad Request: Deactivating your own account
        - 404 Not Found: User not found
    """
    result = await UpdateUserStatusUseCase(uow).execute(
        user_id,
        UpdateUserStatusCommand(**request.model_dump()),
        audit_context(http_request, principal),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=DeactivateUserResponse
)
async def deactivate_user(
    user_id: UUID,
    http_request: Request,
    principal: Principal = Depends(require(ADMIN_ONLY)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Soft delete an account: deactivate it, revoke its sessions and roles.

    Raises:
        - 400 Bad Request: Deleting your own account
        - 404 Not Found: User not found
    """
    result = await DeactivateUserUseCase(uow).execute(
        user_id, audit_context(http_request, principal)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
