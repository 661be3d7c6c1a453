from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext
from src.domain.entities import Permission
from src.domain.result import Error, Result, Return
from .dtos import CreatePermissionCommand, PermissionResponse


class CreatePermissionUseCase:
    """Add a catalog entry. Names are unique."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreatePermissionCommand, context: AuditContext
    ) -> Result[PermissionResponse]:
        async with self.uow:
            existing = await self.uow.permissions.get_by_name(command.name)
            if existing is not None:
                return Return.err(
                    Error(
                        "PERMISSION_ALREADY_EXISTS",
                        "Permission with this name already exists",
                    )
                )

            permission = await self.uow.permissions.create(
                Permission(
                    name=command.name,
                    description=command.description,
                    resource=command.resource,
                    action=command.action,
                )
            )

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.PERMISSION_CREATED,
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

            return Return.ok(PermissionResponse.from_permission(permission))
