"""
Assign Role Use Case

Grants a role to a user. The holding, its history record and the audit
entry are written in one transaction.
"""

from src.app.services.audit_emitter import AuditAction, build_audit_log
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RoleAssignment, UserRole
from src.domain.result import Error, Result, Return
from .dtos import AssignRoleCommand, AuditContext, MessageResponse


class AssignRoleUseCase:
    """
    Use case for assigning a role to a user.

    Business Rules:
    - User must exist
    - Role must exist and be active
    - Assigning a role the user already actively holds is a conflict
    - A previously revoked holding is reactivated, not duplicated
    - Opens a new RoleAssignment record
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: AssignRoleCommand, context: AuditContext
    ) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(command.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            role = await self.uow.roles.get_by_id(command.role_id)
            if role is None or not role.is_active:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found or inactive"))

            user_role = await self.uow.user_roles.get(user.id, role.id)
            if user_role is not None and user_role.is_active:
                return Return.err(
                    Error("ROLE_ALREADY_ASSIGNED", "User already has this role")
                )

            if user_role is None:
                user_role = UserRole(user_id=user.id, role_id=role.id)
            else:
                user_role.is_active = True
                user_role.assigned_at = utcnow()
            await self.uow.user_roles.save(user_role)

            await self.uow.user_roles.create_assignment(
                RoleAssignment(
                    user_id=user.id,
                    role_id=role.id,
                    assigned_by=context.actor_id,
                    reason=command.reason,
                )
            )

            await self.uow.audit_logs.create(
                build_audit_log(
                    AuditAction.ROLE_ASSIGNED,
                    context.actor_id,
                    context.ip_address,
                    context.user_agent,
                    details={
                        "target_user_id": str(user.id),
                        "role_id": str(role.id),
                        "role_name": role.name,
                        "reason": command.reason,
                    },
                    resource="ROLE",
                )
            )

            await self.uow.commit()

            return Return.ok(MessageResponse(message="Role assigned successfully"))
