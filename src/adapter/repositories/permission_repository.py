from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.base import utcnow
from src.domain.entities import Permission, RolePermission


class PermissionRepository(IPermissionRepository):
    """Permission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        """Get permission by ID"""
        stmt = select(Permission).where(Permission.id == permission_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by unique name"""
        stmt = select(Permission).where(Permission.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self, resource: Optional[str] = None) -> List[Permission]:
        """List active permissions ordered by resource and name"""
        stmt = select(Permission).where(Permission.is_active == True)
        if resource is not None:
            stmt = stmt.where(Permission.resource == resource)
        stmt = stmt.order_by(Permission.resource, Permission.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, permission: Permission) -> Permission:
        """Create a new catalog entry"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def get_grant(
        self, role_id: UUID, permission_id: UUID
    ) -> Optional[RolePermission]:
        """Get the role/permission junction row, active or not"""
        stmt = select(RolePermission).where(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save_grant(self, grant: RolePermission) -> RolePermission:
        """Create or update a role/permission junction row"""
        grant.updated_at = utcnow()
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant

    async def get_role_permission_names(self, role_id: UUID) -> List[str]:
        """Names of active permissions actively granted to a role"""
        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(
                RolePermission.role_id == role_id,
                RolePermission.is_active == True,
                Permission.is_active == True,
            )
            .order_by(Permission.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update(self, permission: Permission) -> Permission:
        """Update existing catalog entry"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def count_active_grants(self, permission_id: UUID) -> int:
        """Count roles the permission is actively granted to"""
        stmt = select(func.count(RolePermission.id)).where(
            RolePermission.permission_id == permission_id,
            RolePermission.is_active == True,
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def list_role_permissions(self, role_id: UUID) -> List[Permission]:
        """Active permissions actively granted to a role, ordered by name"""
        stmt = (
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(
                RolePermission.role_id == role_id,
                RolePermission.is_active == True,
                Permission.is_active == True,
            )
            .order_by(Permission.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
