from uuid import UUID

from src.app.services.permission_aggregator import PermissionAggregator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import UserAccessResponse


class GetUserAccessUseCase:
    """Effective roles and permissions of a user"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserAccessResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            access = await PermissionAggregator(self.uow).resolve(user.id)
            return Return.ok(
                UserAccessResponse(
                    user_id=str(user.id),
                    email=user.email,
                    roles=sorted(access.roles),
                    permissions=sorted(access.permissions),
                )
            )
