import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .assign_role_use_case import AssignRoleUseCase
from .dtos import (
    AssignRoleCommand,
    AuditContext,
    BulkAssignFailure,
    BulkAssignResponse,
    BulkAssignRolesCommand,
)

logger = logging.getLogger(__name__)


class BulkAssignRolesUseCase:
    """
    Assign one role to many users.

    Each user is handled in its own transaction; a failure for one user is
    collected and the batch continues.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: BulkAssignRolesCommand, context: AuditContext
    ) -> Result[BulkAssignResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(command.role_id)
            if role is None or not role.is_active:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found or inactive"))

        assign = AssignRoleUseCase(self.uow)
        success_count = 0
        failures = []

        for user_id in command.user_ids:
            try:
                result = await assign.execute(
                    AssignRoleCommand(
                        user_id=user_id, role_id=command.role_id, reason=command.reason
                    ),
                    context,
                )
            except Exception as exc:
                logger.exception(f"Bulk role assignment failed for user {user_id}")
                failures.append(BulkAssignFailure(user_id=str(user_id), error=str(exc)))
                continue

            if result.is_err():
                failures.append(
                    BulkAssignFailure(user_id=str(user_id), error=result.error.message)
                )
            else:
                success_count += 1

        return Return.ok(
            BulkAssignResponse(success_count=success_count, failures=failures)
        )
