from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Permission, RolePermission


class IPermissionRepository(ABC):
    """Permission catalog and role grants - application layer"""

    @abstractmethod
    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        """Get permission by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by unique name"""
        pass

    @abstractmethod
    async def list(self, resource: Optional[str] = None) -> List[Permission]:
        """List active permissions, optionally for one resource"""
        pass

    @abstractmethod
    async def create(self, permission: Permission) -> Permission:
        """Create a new catalog entry"""
        pass

    @abstractmethod
    async def get_grant(
        self, role_id: UUID, permission_id: UUID
    ) -> Optional[RolePermission]:
        """Get the role/permission junction row, active or not"""
        pass

    @abstractmethod
    async def save_grant(self, grant: RolePermission) -> RolePermission:
        """Create or update a role/permission junction row"""
        pass

    @abstractmethod
    async def get_role_permission_names(self, role_id: UUID) -> List[str]:
        """Names of active permissions actively granted to a role"""
        pass

    @abstractmethod
    async def update(self, permission: Permission) -> Permission:
        """Update existing catalog entry"""
        pass

    @abstractmethod
    async def count_active_grants(self, permission_id: UUID) -> int:
        """Count roles the permission is actively granted to"""
        pass

    @abstractmethod
    async def list_role_permissions(self, role_id: UUID) -> List[Permission]:
        """Active permissions actively granted to a role, ordered by name"""
        pass
