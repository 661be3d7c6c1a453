from typing import List

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import RoleResponse


class ListRolesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, include_inactive: bool = False) -> Result[List[RoleResponse]]:
        async with self.uow:
            roles = await self.uow.roles.list(include_inactive=include_inactive)
            responses = []
            for role in roles:
                permissions = await self.uow.permissions.get_role_permission_names(
                    role.id
                )
                responses.append(RoleResponse.from_role(role, permissions))
            return Return.ok(responses)
