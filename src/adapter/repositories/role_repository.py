from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.role_repository import IRoleRepository
from src.domain.base import utcnow
from src.domain.entities import Role, UserRole


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        stmt = select(Role).where(Role.id == role_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        stmt = select(Role).where(Role.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_default(self) -> Optional[Role]:
        """Get the active role flagged as default, if any"""
        stmt = select(Role).where(Role.is_default == True, Role.is_active == True)
        result = await self.session.exec(stmt)
        return result.first()

    async def list(self, include_inactive: bool = False) -> List[Role]:
        """List roles ordered by name"""
        stmt = select(Role)
        if not include_inactive:
            stmt = stmt.where(Role.is_active == True)
        stmt = stmt.order_by(Role.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, role: Role) -> Role:
        """Create a new role"""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        """Update existing role"""
        role.updated_at = utcnow()
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def clear_default(self, except_role_id: Optional[UUID] = None) -> int:
        """Unset is_default on every role except the given one"""
        stmt = update(Role).where(Role.is_default == True)
        if except_role_id is not None:
            stmt = stmt.where(Role.id != except_role_id)
        stmt = stmt.values(is_default=False, updated_at=utcnow())
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_active_holders(self, role_id: UUID) -> int:
        """Count users currently holding the role"""
        stmt = select(func.count(UserRole.id)).where(
            UserRole.role_id == role_id, UserRole.is_active == True
        )
        result = await self.session.exec(stmt)
        return result.one()
