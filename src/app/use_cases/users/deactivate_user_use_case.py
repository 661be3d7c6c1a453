from uuid import UUID

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext
from src.domain.base import utcnow
from src.domain.result import Error, Result, Return
from .dtos import DeactivateUserResponse

REMOVAL_REASON = "User deactivated"


class DeactivateUserUseCase:
    """
    Soft delete an account.

    Business Rules:
    - An admin cannot remove their own account
    - User is deactivated, every session revoked and every role holding
      deactivated, all in one transaction
    - Open assignment records are closed so the history stays consistent
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, context: AuditContext
    ) -> Result[DeactivateUserResponse]:
        if context.actor_id == user_id:
            return Return.err(
                Error("CANNOT_DEACTIVATE_SELF", "Cannot delete your own account")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            deactivated_at = utcnow()
            user.is_active = False
            user = await self.uow.users.update(user)

            revoked_sessions = await self.uow.sessions.revoke_all_by_user_id(user.id)
            revoked_roles = await self.uow.user_roles.deactivate_all_by_user_id(user.id)
            await self.uow.user_roles.close_open_assignments(
                user.id, revoked_by=context.actor_id, reason=REMOVAL_REASON
            )

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.USER_DEACTIVATED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "target_user_id": str(user.id),
                        "revoked_sessions": revoked_sessions,
                        "revoked_roles": revoked_roles,
                    },
                    resource="USER",
                )
            )
            await self.uow.commit()

            return Return.ok(
                DeactivateUserResponse(
                    message="User deactivated successfully",
                    deactivated_at=deactivated_at,
                    revoked_sessions=revoked_sessions,
                    revoked_roles=revoked_roles,
                )
            )
