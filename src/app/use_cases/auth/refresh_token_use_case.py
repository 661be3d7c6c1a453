"""
Refresh Token Use Case

Rotates a refresh token: the presented token is consumed and a new pair
is issued on a new session row.
"""

from typing import Optional

from src.app.services.audit_emitter import AuditAction, AuditEmitter
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import AuthResponse
from .session_issuer import build_auth_response, open_session


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Token signature and type are verified before touching the store
    - Session must be live (not revoked, not expired)
    - User must still exist and be active
    - Old session is revoked with a conditional update; a caller that
      loses the race for the same token fails
    - Every failure is the same INVALID_TOKEN error
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[AuthResponse]:
        invalid = Error("INVALID_TOKEN", "Invalid or expired refresh token")

        payload = self.token_service.verify_refresh_token(refresh_token)
        if payload is None:
            return Return.err(invalid)

        async with self.uow:
            session = await self.uow.sessions.get_live(refresh_token)
            if session is None or str(session.user_id) != payload["sub"]:
                return Return.err(invalid)

            user = await self.uow.users.get_active_by_id(session.user_id)
            if user is None:
                return Return.err(invalid)

            # Only the caller that flips is_revoked may continue
            claimed = await self.uow.sessions.revoke(refresh_token)
            if not claimed:
                return Return.err(invalid)

            access_token, new_refresh_token, expires_in, new_session = (
                await open_session(
                    self.uow, self.token_service, user, user_agent, ip_address
                )
            )

            await self.uow.commit()

            response = await build_auth_response(
                self.uow, user, access_token, new_refresh_token, expires_in
            )

            await AuditEmitter(self.uow).record(
                AuditAction.TOKEN_REFRESH,
                user.id,
                ip_address=ip_address,
                user_agent=user_agent,
                details={
                    "previous_session_id": str(session.id),
                    "session_id": str(new_session.id),
                },
            )

            return Return.ok(response)
