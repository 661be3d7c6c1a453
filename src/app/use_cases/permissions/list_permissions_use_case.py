from typing import List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import PermissionResponse


class ListPermissionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, resource: Optional[str] = None
    ) -> Result[List[PermissionResponse]]:
        async with self.uow:
            permissions = await self.uow.permissions.list(resource=resource)
            return Return.ok(
                [PermissionResponse.from_permission(p) for p in permissions]
            )
