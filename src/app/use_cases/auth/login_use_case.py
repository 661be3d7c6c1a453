"""
Login Use Case

Authenticates a user and opens a new session for the device.
"""

from typing import Optional

from src.app.services.audit_emitter import AuditAction, AuditEmitter
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.result import Error, Result, Return
from .dtos import AuthResponse
from .session_issuer import build_auth_response, open_session


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email, inactive account and wrong password all fail with the
      same INVALID_CREDENTIALS error
    - A dummy hash check runs for unknown emails to keep timing uniform
    - Other sessions of the user are left untouched (multi-device)
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        password_hasher: PasswordHasher,
    ):
        self.uow = uow
        self.token_service = token_service
        self.password_hasher = password_hasher

    async def execute(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[AuthResponse]:
        invalid = Error("INVALID_CREDENTIALS", "Invalid email or password")

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                self.password_hasher.dummy_verify()
                return Return.err(invalid)

            if not self.password_hasher.verify(password, user.password_hash):
                return Return.err(invalid)

            if not user.is_active:
                return Return.err(invalid)

            user.last_login_at = utcnow()
            user = await self.uow.users.update(user)

            access_token, refresh_token, expires_in, _ = await open_session(
                self.uow, self.token_service, user, user_agent, ip_address
            )

            await self.uow.commit()

            response = await build_auth_response(
                self.uow, user, access_token, refresh_token, expires_in
            )

            await AuditEmitter(self.uow).record(
                AuditAction.LOGIN,
                user.id,
                ip_address=ip_address,
                user_agent=user_agent,
            )

            return Return.ok(response)
