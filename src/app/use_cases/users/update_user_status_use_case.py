"""
Update User Status Use Case

Activates or deactivates an account. Deactivation signs the user out of
every device in the same transaction.
"""

from uuid import UUID

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext
from src.domain.result import Error, Result, Return
from .dtos import UpdateUserStatusCommand, UserStatusResponse


class UpdateUserStatusUseCase:
    """
    Business Rules:
    - An admin cannot deactivate their own account
    - Deactivating revokes all of the user's sessions
    - Role holdings are kept; they stop counting while the user is inactive
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, command: UpdateUserStatusCommand, context: AuditContext
    ) -> Result[UserStatusResponse]:
        if not command.is_active and context.actor_id == user_id:
            return Return.err(
                Error("CANNOT_DEACTIVATE_SELF", "Cannot deactivate your own account")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            previous = user.is_active
            user.is_active = command.is_active
            user = await self.uow.users.update(user)

            revoked_count = 0
            if not command.is_active:
                revoked_count = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.USER_STATUS_CHANGED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "target_user_id": str(user.id),
                        "previous": previous,
                        "is_active": command.is_active,
                        "reason": command.reason,
                        "revoked_sessions": revoked_count,
                    },
                    resource="USER",
                )
            )
            await self.uow.commit()

            return Return.ok(
                UserStatusResponse(
                    id=str(user.id),
                    email=user.email,
                    is_active=user.is_active,
                    revoked_sessions=revoked_count,
                )
            )
