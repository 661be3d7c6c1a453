from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext, MessageResponse
from src.domain.result import Error, Result, Return
from .dtos import RolePermissionCommand


class RevokePermissionFromRoleUseCase:
    """Soft deactivate an active role/permission grant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: RolePermissionCommand, context: AuditContext
    ) -> Result[MessageResponse]:
        async with self.uow:
            grant = await self.uow.permissions.get_grant(
                command.role_id, command.permission_id
            )
            if grant is None or not grant.is_active:
                return Return.err(
                    Error("PERMISSION_NOT_GRANTED", "Role does not have this permission")
                )

            grant.is_active = False
            await self.uow.permissions.save_grant(grant)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.PERMISSION_REVOKED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "role_id": str(command.role_id),
                        "permission_id": str(command.permission_id),
                    },
                    resource="PERMISSION",
                )
            )
            await self.uow.commit()

            return Return.ok(
                MessageResponse(message="Permission revoked from role successfully")
            )
