from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.result import Error, Result, Return
from .dtos import AuditContext, MessageResponse, RevokeRoleCommand


class RevokeRoleUseCase:
    """
    Use case for revoking a role from a user.

    Business Rules:
    - The user must actively hold the role
    - The holding is soft deactivated
    - The open RoleAssignment record is closed, never deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: RevokeRoleCommand, context: AuditContext
    ) -> Result[MessageResponse]:
        async with self.uow:
            user_role = await self.uow.user_roles.get(command.user_id, command.role_id)
            if user_role is None or not user_role.is_active:
                return Return.err(
                    Error("ROLE_NOT_ASSIGNED", "User does not have this role")
                )

            role = await self.uow.roles.get_by_id(command.role_id)

            user_role.is_active = False
            await self.uow.user_roles.save(user_role)

            assignment = await self.uow.user_roles.get_open_assignment(
                command.user_id, command.role_id
            )
            if assignment is not None:
                assignment.is_active = False
                assignment.revoked_at = utcnow()
                assignment.revoked_by = context.actor_id
                assignment.revoke_reason = command.reason
                await self.uow.user_roles.update_assignment(assignment)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.ROLE_REVOKED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "target_user_id": str(command.user_id),
                        "role_id": str(command.role_id),
                        "role_name": role.name if role else None,
                        "reason": command.reason,
                    },
                    resource="ROLE",
                )
            )

            await self.uow.commit()

            return Return.ok(MessageResponse(message="Role revoked successfully"))
