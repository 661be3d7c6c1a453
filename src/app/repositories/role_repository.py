from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        pass

    @abstractmethod
    async def get_default(self) -> Optional[Role]:
        """Get the active role flagged as default, if any"""
        pass

    @abstractmethod
    async def list(self, include_inactive: bool = False) -> List[Role]:
        """List roles ordered by name"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role"""
        pass

    @abstractmethod
    async def clear_default(self, except_role_id: Optional[UUID] = None) -> int:
        """Unset is_default on every role except the given one. Returns count."""
        pass

    @abstractmethod
    async def count_active_holders(self, role_id: UUID) -> int:
        """Count users currently holding the role"""
        pass
