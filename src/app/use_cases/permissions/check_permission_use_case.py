from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import PermissionCheckResponse


class CheckPermissionUseCase:
    """
    Whether a user effectively holds a permission, and through which roles.

    Uses the same active-grant resolution as request authorization.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, permission: str
    ) -> Result[PermissionCheckResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            granted_by = set()
            if user.is_active:
                grants = await self.uow.user_roles.get_active_grants(user.id)
                granted_by = {role for role, name in grants if name == permission}

            return Return.ok(
                PermissionCheckResponse(
                    user_id=str(user.id),
                    permission=permission,
                    has_permission=bool(granted_by),
                    granted_by_roles=sorted(granted_by),
                )
            )
