from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import RoleAssignmentResponse


class GetRoleAssignmentHistoryUseCase:
    """Every grant and revocation of roles for a user, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[RoleAssignmentResponse]]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            assignments = await self.uow.user_roles.list_assignments(user_id)

            role_names = {}
            history = []
            for assignment in assignments:
                if assignment.role_id not in role_names:
                    role = await self.uow.roles.get_by_id(assignment.role_id)
                    role_names[assignment.role_id] = role.name if role else None
                history.append(
                    RoleAssignmentResponse.from_assignment(
                        assignment, role_names[assignment.role_id]
                    )
                )
            return Return.ok(history)
