import logging

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles.dtos import AuditContext
from src.domain.result import Error, Result, Return
from .assign_permission_to_role_use_case import AssignPermissionToRoleUseCase
from .dtos import (
    BulkAssignPermissionFailure,
    BulkAssignPermissionsCommand,
    BulkAssignPermissionsResponse,
    RolePermissionCommand,
)

logger = logging.getLogger(__name__)


class BulkAssignPermissionsUseCase:
    """
    Grant many permissions to one role.

    Each grant is its own transaction; failures are collected and the batch
    continues.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: BulkAssignPermissionsCommand, context: AuditContext
    ) -> Result[BulkAssignPermissionsResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(command.role_id)
            if role is None or not role.is_active:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found or inactive"))
            role_name = role.name

        assign = AssignPermissionToRoleUseCase(self.uow)
        success_count = 0
        failures = []

        for permission_id in command.permission_ids:
            try:
                result = await assign.execute(
                    RolePermissionCommand(
                        role_id=command.role_id, permission_id=permission_id
                    ),
                    context,
                )
            except Exception as exc:
                logger.exception(f"Bulk permission grant failed for {permission_id}")
                failures.append(
                    BulkAssignPermissionFailure(
                        permission_id=str(permission_id), error=str(exc)
                    )
                )
                continue

            if result.is_err():
                failures.append(
                    BulkAssignPermissionFailure(
                        permission_id=str(permission_id), error=result.error.message
                    )
                )
            else:
                success_count += 1

        logger.info(
            f"Bulk permission grant to role {role_name}: "
            f"{success_count} successful, {len(failures)} failed"
        )
        return Return.ok(
            BulkAssignPermissionsResponse(success_count=success_count, failures=failures)
        )
