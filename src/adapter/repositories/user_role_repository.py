from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_role_repository import IUserRoleRepository
from src.domain.base import utcnow
from src.domain.entities import (
    Permission,
    Role,
    RoleAssignment,
    RolePermission,
    User,
    UserRole,
)


class UserRoleRepository(IUserRoleRepository):
    """UserRole and RoleAssignment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: UUID, role_id: UUID) -> Optional[UserRole]:
        """Get the user/role junction row, active or not"""
        stmt = select(UserRole).where(
            UserRole.user_id == user_id, UserRole.role_id == role_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save(self, user_role: UserRole) -> UserRole:
        """Create or update a user/role junction row"""
        user_role.updated_at = utcnow()
        self.session.add(user_role)
        await self.session.flush()
        await self.session.refresh(user_role)
        return user_role

    async def get_active_grants(
        self, user_id: UUID
    ) -> List[Tuple[str, Optional[str]]]:
        """
        Role/permission pairs the user currently holds.

        The permission side is outer-joined with its active predicates in the
        ON clause so that an active role without qualifying permissions still
        yields a (role_name, None) row.
        """
        stmt = (
            select(Role.name, Permission.name)
            .select_from(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .outerjoin(
                RolePermission,
                and_(
                    RolePermission.role_id == Role.id,
                    RolePermission.is_active == True,
                ),
            )
            .outerjoin(
                Permission,
                and_(
                    Permission.id == RolePermission.permission_id,
                    Permission.is_active == True,
                ),
            )
            .where(
                UserRole.user_id == user_id,
                UserRole.is_active == True,
                Role.is_active == True,
            )
        )
        result = await self.session.execute(stmt)
        return [(role_name, permission_name) for role_name, permission_name in result.all()]

    async def create_assignment(self, assignment: RoleAssignment) -> RoleAssignment:
        """Append an assignment history record"""
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def get_open_assignment(
        self, user_id: UUID, role_id: UUID
    ) -> Optional[RoleAssignment]:
        """Get the open (is_active) assignment record for a held role"""
        stmt = (
            select(RoleAssignment)
            .where(
                RoleAssignment.user_id == user_id,
                RoleAssignment.role_id == role_id,
                RoleAssignment.is_active == True,
                RoleAssignment.revoked_at == None,
            )
            .order_by(RoleAssignment.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def update_assignment(self, assignment: RoleAssignment) -> RoleAssignment:
        """Close or otherwise update an assignment record"""
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def list_assignments(self, user_id: UUID) -> List[RoleAssignment]:
        """Assignment history for a user, newest first"""
        stmt = (
            select(RoleAssignment)
            .where(RoleAssignment.user_id == user_id)
            .order_by(RoleAssignment.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def deactivate_all_by_user_id(self, user_id: UUID) -> int:
        """Deactivate every active holding of a user"""
        stmt = (
            update(UserRole)
            .where(UserRole.user_id == user_id, UserRole.is_active == True)
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def close_open_assignments(
        self, user_id: UUID, revoked_by: Optional[UUID], reason: Optional[str]
    ) -> int:
        """Close every open assignment record of a user"""
        stmt = (
            update(RoleAssignment)
            .where(
                RoleAssignment.user_id == user_id,
                RoleAssignment.is_active == True,
            )
            .values(
                is_active=False,
                revoked_at=utcnow(),
                revoked_by=revoked_by,
                revoke_reason=reason,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def list_active_holders(self, role_id: UUID) -> List[User]:
        """Users actively holding a role, ordered by email"""
        stmt = (
            select(User)
            .join(UserRole, UserRole.user_id == User.id)
            .where(UserRole.role_id == role_id, UserRole.is_active == True)
            .order_by(User.email)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
