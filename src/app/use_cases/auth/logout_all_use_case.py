from typing import Optional
from uuid import UUID

from src.app.services.audit_emitter import AuditAction, AuditEmitter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import LogoutAllResponse


class LogoutAllUseCase:
    """
    Revoke every session of a user ("sign out everywhere").

    An unknown user id revokes nothing and still succeeds.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[LogoutAllResponse]:
        async with self.uow:
            revoked_count = await self.uow.sessions.revoke_all_by_user_id(user_id)
            await self.uow.commit()

            user = await self.uow.users.get_by_id(user_id)
            if user is not None:
                await AuditEmitter(self.uow).record(
                    AuditAction.LOGOUT_ALL,
                    user_id,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    details={"revoked_sessions": revoked_count},
                )

            return Return.ok(
                LogoutAllResponse(
                    message="Logged out from all devices",
                    revoked_sessions=revoked_count,
                )
            )
