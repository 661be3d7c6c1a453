from uuid import UUID

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext
from src.domain.result import Error, Result, Return


class DeletePermissionUseCase:
    """
    Soft delete a catalog entry (is_active=False).

    Business Rules:
    - Refused while the permission is actively granted to any role;
      revoke the grants first
    - The row and its historical grants are kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, permission_id: UUID, context: AuditContext) -> Result[None]:
        async with self.uow:
            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None or not permission.is_active:
                return Return.err(Error("PERMISSION_NOT_FOUND", "Permission not found"))

            grants = await self.uow.permissions.count_active_grants(permission.id)
            if grants > 0:
                return Return.err(
                    Error(
                        "PERMISSION_IN_USE",
                        "Cannot delete permission that is assigned to roles. "
                        "Remove all assignments first.",
                    )
                )

            permission.is_active = False
            await self.uow.permissions.update(permission)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.PERMISSION_DELETED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "permission_id": str(permission.id),
                        "permission_name": permission.name,
                    },
                    resource="PERMISSION",
                )
            )
            await self.uow.commit()

            return Return.ok()
