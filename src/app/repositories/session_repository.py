from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session store interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Persist a new session. Errors propagate to the caller."""
        pass

    @abstractmethod
    async def get_live(self, refresh_token: str) -> Optional[Session]:
        """
        Get the session for a refresh token only if it is live.

        Revoked, expired and unknown tokens all return None.
        """
        pass

    @abstractmethod
    async def revoke(self, refresh_token: str) -> bool:
        """
        Revoke a session with a conditional update on is_revoked=False.

        Returns True only for the caller that transitioned the row.
        """
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        """Revoke every non-revoked session for a user. Returns count."""
        pass

    @abstractmethod
    async def delete_dead(self) -> int:
        """Delete expired or revoked sessions. Returns count."""
        pass

    @abstractmethod
    async def touch_activity(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> bool:
        """Update last-seen metadata of a live session without changing validity"""
        pass
