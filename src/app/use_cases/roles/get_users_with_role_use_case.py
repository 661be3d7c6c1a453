from typing import List
from uuid import UUID

from src.app.services.permission_aggregator import PermissionAggregator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import UserAccessResponse


class GetUsersWithRoleUseCase:
    """Active holders of a role with their full effective access"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID) -> Result[List[UserAccessResponse]]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            aggregator = PermissionAggregator(self.uow)
            holders = []
            for user in await self.uow.user_roles.list_active_holders(role.id):
                access = await aggregator.resolve(user.id)
                holders.append(
                    UserAccessResponse(
                        user_id=str(user.id),
                        email=user.email,
                        roles=sorted(access.roles),
                        permissions=sorted(access.permissions),
                    )
                )
            return Return.ok(holders)
