from typing import Optional
from uuid import UUID

from src.app.services.permission_aggregator import PermissionAggregator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import Principal


class ValidatePrincipalUseCase:
    """
    Resolve the subject of a verified access token.

    Returns None (not an error) when the user is missing or inactive so the
    request pipeline can answer with a uniform 401.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Optional[Principal]:
        async with self.uow:
            user = await self.uow.users.get_active_by_id(user_id)
            if user is None:
                return None

            access = await PermissionAggregator(self.uow).resolve(user.id)
            return Principal(
                id=user.id,
                email=user.email,
                roles=access.roles,
                permissions=access.permissions,
                is_active=user.is_active,
            )
