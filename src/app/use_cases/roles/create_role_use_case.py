from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Role
from src.domain.result import Error, Result, Return
from .dtos import AuditContext, CreateRoleCommand, RoleResponse


class CreateRoleUseCase:
    """
    Create a role.

    Business Rules:
    - Name must be unique
    - Creating a default role unsets the previous default in the same
      transaction (at most one default system-wide)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreateRoleCommand, context: AuditContext
    ) -> Result[RoleResponse]:
        async with self.uow:
            existing = await self.uow.roles.get_by_name(command.name)
            if existing is not None:
                return Return.err(
                    Error("ROLE_ALREADY_EXISTS", "Role with this name already exists")
                )

            if command.is_default:
                await self.uow.roles.clear_default()

            role = await self.uow.roles.create(
                Role(
                    name=command.name,
                    description=command.description,
                    is_default=command.is_default,
                )
            )

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.ROLE_CREATED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "role_id": str(role.id),
                        "role_name": role.name,
                        "is_default": role.is_default,
                    },
                    resource="ROLE",
                )
            )
            await self.uow.commit()

            return Return.ok(RoleResponse.from_role(role, []))
