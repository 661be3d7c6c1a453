from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import RoleAssignment, User, UserRole


class IUserRoleRepository(ABC):
    """User role holdings and their assignment history - application layer"""

    @abstractmethod
    async def get(self, user_id: UUID, role_id: UUID) -> Optional[UserRole]:
        """Get the user/role junction row, active or not"""
        pass

    @abstractmethod
    async def save(self, user_role: UserRole) -> UserRole:
        """Create or update a user/role junction row"""
        pass

    @abstractmethod
    async def get_active_grants(
        self, user_id: UUID
    ) -> List[Tuple[str, Optional[str]]]:
        """
        Role/permission pairs the user currently holds.

        One (role_name, permission_name) tuple per active permission of each
        active role held through an active junction; roles without any
        qualifying permission appear once as (role_name, None).
        """
        pass

    @abstractmethod
    async def create_assignment(self, assignment: RoleAssignment) -> RoleAssignment:
        """Append an assignment history record"""
        pass

    @abstractmethod
    async def get_open_assignment(
        self, user_id: UUID, role_id: UUID
    ) -> Optional[RoleAssignment]:
        """Get the open (is_active) assignment record for a held role"""
        pass

    @abstractmethod
    async def update_assignment(self, assignment: RoleAssignment) -> RoleAssignment:
        """Close or otherwise update an assignment record"""
        pass

    @abstractmethod
    async def list_assignments(self, user_id: UUID) -> List[RoleAssignment]:
        """Assignment history for a user, newest first"""
        pass

    @abstractmethod
    async def deactivate_all_by_user_id(self, user_id: UUID) -> int:
        """Deactivate every active holding of a user. Returns count."""
        pass

    @abstractmethod
    async def close_open_assignments(
        self, user_id: UUID, revoked_by: Optional[UUID], reason: Optional[str]
    ) -> int:
        """Close every open assignment record of a user. Returns count."""
        pass

    @abstractmethod
    async def list_active_holders(self, role_id: UUID) -> List[User]:
        """Users actively holding a role, ordered by email"""
        pass
