from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import PermissionResponse, RolePermissionsResponse


class GetRolePermissionsUseCase:
    """Active permissions actively granted to one role"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID) -> Result[RolePermissionsResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            permissions = await self.uow.permissions.list_role_permissions(role.id)
            return Return.ok(
                RolePermissionsResponse(
                    role_id=str(role.id),
                    role_name=role.name,
                    is_active=role.is_active,
                    permissions=[PermissionResponse.from_permission(p) for p in permissions],
                )
            )
