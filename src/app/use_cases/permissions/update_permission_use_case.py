from uuid import UUID

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext
from src.domain.result import Error, Result, Return
from .dtos import PermissionResponse, UpdatePermissionCommand


class UpdatePermissionUseCase:
    """
    Update a catalog entry.

    Business Rules:
    - Renaming to a name held by another permission is a conflict
    - Deactivating follows the delete rule: refused while granted to a role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        permission_id: UUID,
        command: UpdatePermissionCommand,
        context: AuditContext,
    ) -> Result[PermissionResponse]:
        async with self.uow:
            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None:
                return Return.err(Error("PERMISSION_NOT_FOUND", "Permission not found"))

            if command.name is not None and command.name != permission.name:
                clash = await self.uow.permissions.get_by_name(command.name)
                if clash is not None:
                    return Return.err(
                        Error(
                            "PERMISSION_ALREADY_EXISTS",
                            "Permission with this name already exists",
                        )
                    )

            if command.is_active is False and permission.is_active:
                grants = await self.uow.permissions.count_active_grants(permission.id)
                if grants > 0:
                    return Return.err(
                        Error(
                            "PERMISSION_IN_USE",
                            f"Cannot deactivate permission granted to roles ({grants} roles)",
                        )
                    )

            changes = command.model_dump(exclude_none=True)
            for field, value in changes.items():
                setattr(permission, field, value)
            permission = await self.uow.permissions.update(permission)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.PERMISSION_UPDATED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={"permission_id": str(permission.id), "changes": changes},
                    resource="PERMISSION",
                )
            )
            await self.uow.commit()

            return Return.ok(PermissionResponse.from_permission(permission))
