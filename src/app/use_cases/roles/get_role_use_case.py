from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import RoleResponse


class GetRoleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            permissions = await self.uow.permissions.get_role_permission_names(role.id)
            return Return.ok(RoleResponse.from_role(role, permissions))


class GetDefaultRoleUseCase:
    """Role granted to newly registered users"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_default()
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "No default role configured"))

            permissions = await self.uow.permissions.get_role_permission_names(role.id)
            return Return.ok(RoleResponse.from_role(role, permissions))
