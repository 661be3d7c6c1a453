"""
Register Use Case

Creates a portal account, grants the default role and opens the first
session.
"""

import logging
from typing import Optional

from config import AuthSettings
from src.app.services.audit_emitter import AuditAction, AuditEmitter
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Role, RoleAssignment, User, UserProfile, UserRole
from src.domain.result import Error, Result, Return
from .dtos import AuthResponse, RegisterCommand
from .session_issuer import build_auth_response, open_session

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for user registration.

    Business Rules:
    - Email must be unused
    - Password hashed with bcrypt
    - User and profile are created together
    - The default role (is_default flag, else the configured name) is
      granted with an assignment record; missing default role is logged
    - Session expiry equals the refresh token lifetime
    - REGISTER audit entry after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        password_hasher: PasswordHasher,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.token_service = token_service
        self.password_hasher = password_hasher
        self.settings = settings

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        async with self.uow:
            existing = await self.uow.users.get_by_email(command.email)
            if existing is not None:
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_EXISTS",
                        "User with this email already exists",
                    )
                )

            user = User(
                email=command.email,
                password_hash=self.password_hasher.hash(command.password),
                first_name=command.first_name,
                last_name=command.last_name,
            )
            user = await self.uow.users.create(user)
            await self.uow.users.create_profile(UserProfile(user_id=user.id))

            default_role = await self._find_default_role()
            if default_role is None:
                logger.warning(
                    f"No default role found, user {user.id} registered without roles"
                )
            else:
                await self.uow.user_roles.save(
                    UserRole(user_id=user.id, role_id=default_role.id)
                )
                await self.uow.user_roles.create_assignment(
                    RoleAssignment(
                        user_id=user.id,
                        role_id=default_role.id,
                        reason="Default role on registration",
                    )
                )

            access_token, refresh_token, expires_in, _ = await open_session(
                self.uow,
                self.token_service,
                user,
                command.user_agent,
                command.ip_address,
            )

            await self.uow.commit()

            response = await build_auth_response(
                self.uow, user, access_token, refresh_token, expires_in
            )

            await AuditEmitter(self.uow).record(
                AuditAction.REGISTER,
                user.id,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                details={"email": user.email},
            )

            return Return.ok(response)

    async def _find_default_role(self) -> Optional[Role]:
        role = await self.uow.roles.get_default()
        if role is not None:
            return role
        role = await self.uow.roles.get_by_name(self.settings.default_role)
        if role is not None and role.is_active:
            return role
        return None
