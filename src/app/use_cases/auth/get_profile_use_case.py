from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import Principal
from src.domain.result import Error, Result, Return
from .dtos import ProfileResponse


class GetProfileUseCase:
    """Profile of the authenticated principal"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                ProfileResponse(
                    id=str(user.id),
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    roles=sorted(principal.roles),
                    permissions=sorted(principal.permissions),
                    is_active=user.is_active,
                    is_verified=user.is_verified,
                )
            )
