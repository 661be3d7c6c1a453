from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User, UserProfile


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_active_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID only if the account is active"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def create_profile(self, profile: UserProfile) -> UserProfile:
        """Create the profile row that accompanies a new user"""
        pass
