from typing import Optional
from uuid import UUID

from src.app.services.audit_emitter import AuditAction, AuditEmitter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Revoke the session behind a refresh token.

    Idempotent: an unknown, expired or already revoked token is a success.
    When ``user_id`` is given, sessions of other users are left alone.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        refresh_token: str,
        user_id: Optional[UUID] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[LogoutResponse]:
        response = LogoutResponse(message="Logged out successfully")

        async with self.uow:
            session = await self.uow.sessions.get_live(refresh_token)
            if session is None:
                return Return.ok(response)
            if user_id is not None and session.user_id != user_id:
                return Return.ok(response)

            owner_id = session.user_id
            revoked = await self.uow.sessions.revoke(refresh_token)
            await self.uow.commit()

            if revoked:
                await AuditEmitter(self.uow).record(
                    AuditAction.LOGOUT,
                    owner_id,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )

            return Return.ok(response)
