from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext, MessageResponse
from src.domain.entities import RolePermission
from src.domain.result import Error, Result, Return
from .dtos import RolePermissionCommand


class AssignPermissionToRoleUseCase:
    """
    Grant a permission to a role.

    Business Rules:
    - Role and permission must exist and be active
    - Granting an already active grant is a conflict
    - A revoked grant is reactivated
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: RolePermissionCommand, context: AuditContext
    ) -> Result[MessageResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(command.role_id)
            if role is None or not role.is_active:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found or inactive"))

            permission = await self.uow.permissions.get_by_id(command.permission_id)
            if permission is None or not permission.is_active:
                return Return.err(
                    Error("PERMISSION_NOT_FOUND", "Permission not found or inactive")
                )

            grant = await self.uow.permissions.get_grant(role.id, permission.id)
            if grant is not None and grant.is_active:
                return Return.err(
                    Error(
                        "PERMISSION_ALREADY_GRANTED",
                        "Role already has this permission",
                    )
                )

            if grant is None:
                grant = RolePermission(role_id=role.id, permission_id=permission.id)
            else:
                grant.is_active = True
            await self.uow.permissions.save_grant(grant)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.PERMISSION_ASSIGNED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "role_id": str(role.id),
                        "role_name": role.name,
                        "permission_id": str(permission.id),
                        "permission_name": permission.name,
                    },
                    resource="PERMISSION",
                )
            )
            await self.uow.commit()

            return Return.ok(
                MessageResponse(message="Permission assigned to role successfully")
            )
