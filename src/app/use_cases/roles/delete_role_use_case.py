from uuid import UUID

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import AuditContext


class DeleteRoleUseCase:
    """
    Soft delete a role (is_active=False).

    Business Rules:
    - The default role cannot be deleted
    - A role still held by any user cannot be deleted
    - The row and its assignment history are kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID, context: AuditContext) -> Result[None]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None or not role.is_active:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            if role.is_default:
                return Return.err(
                    Error("DEFAULT_ROLE_UNDELETABLE", "Cannot delete the default role")
                )

            holders = await self.uow.roles.count_active_holders(role.id)
            if holders > 0:
                return Return.err(
                    Error(
                        "ROLE_IN_USE",
                        f"Cannot delete role with active users ({holders} assigned)",
                    )
                )

            role.is_active = False
            await self.uow.roles.update(role)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.ROLE_DELETED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={"role_id": str(role.id), "role_name": role.name},
                    resource="ROLE",
                )
            )
            await self.uow.commit()

            return Return.ok()
