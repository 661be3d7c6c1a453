from typing import Optional
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Persist a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_live(self, refresh_token: str) -> Optional[Session]:
        """Get the session for a refresh token only if it is live"""
        stmt = select(Session).where(
            Session.refresh_token_hash == Session.hash_token(refresh_token),
            Session.is_revoked == False,
            Session.expires_at > utcnow(),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def revoke(self, refresh_token: str) -> bool:
        """Conditionally revoke; only the caller that flips the row wins"""
        stmt = (
            update(Session)
            .where(
                Session.refresh_token_hash == Session.hash_token(refresh_token),
                Session.is_revoked == False,
            )
            .values(is_revoked=True, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        """Revoke all non-revoked sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.is_revoked == False)
            .values(is_revoked=True, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_dead(self) -> int:
        """Delete expired or revoked sessions"""
        stmt = delete(Session).where(
            or_(Session.expires_at < utcnow(), Session.is_revoked == True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def touch_activity(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> bool:
        """Update last-seen metadata of a live session"""
        values = {"updated_at": utcnow()}
        if user_agent:
            values["user_agent"] = user_agent
        if ip_address:
            values["ip_address"] = ip_address

        stmt = (
            update(Session)
            .where(
                Session.refresh_token_hash == Session.hash_token(refresh_token),
                Session.is_revoked == False,
                Session.expires_at > utcnow(),
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
