from uuid import UUID

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import AuditContext, RoleResponse, UpdateRoleCommand


class UpdateRoleUseCase:
    """
    Update a role.

    Business Rules:
    - Renaming to a name held by another role is a conflict
    - Flipping is_default on unsets every other default
    - Deactivating follows the delete rules: never the default role, never
      a role still held by users
    - An inactive role cannot become the default
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, role_id: UUID, command: UpdateRoleCommand, context: AuditContext
    ) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            will_be_active = (
                command.is_active if command.is_active is not None else role.is_active
            )
            will_be_default = (
                command.is_default if command.is_default is not None else role.is_default
            )
            if will_be_default and not will_be_active:
                return Return.err(
                    Error(
                        "DEFAULT_ROLE_UNDELETABLE",
                        "The default role cannot be deactivated",
                    )
                )

            if role.is_active and not will_be_active:
                holders = await self.uow.roles.count_active_holders(role.id)
                if holders > 0:
                    return Return.err(
                        Error(
                            "ROLE_IN_USE",
                            f"Cannot deactivate role with active users ({holders} assigned)",
                        )
                    )

            changes = command.model_dump(exclude_none=True)

            if command.name is not None and command.name != role.name:
                clash = await self.uow.roles.get_by_name(command.name)
                if clash is not None:
                    return Return.err(
                        Error("ROLE_ALREADY_EXISTS", "Role with this name already exists")
                    )
                role.name = command.name

            if command.description is not None:
                role.description = command.description
            if command.is_active is not None:
                role.is_active = command.is_active

            if command.is_default is True:
                await self.uow.roles.clear_default(except_role_id=role.id)
                role.is_default = True
            elif command.is_default is False:
                role.is_default = False

            role = await self.uow.roles.update(role)

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.ROLE_UPDATED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={"role_id": str(role.id), "changes": changes},
                    resource="ROLE",
                )
            )
            await self.uow.commit()

            permissions = await self.uow.permissions.get_role_permission_names(role.id)
            return Return.ok(RoleResponse.from_role(role, permissions))
