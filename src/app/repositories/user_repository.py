from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_identity(
        self, username: str, email: str, phone: str, for_update: bool = False
    ) -> Optional[User]:
        """Get the user matching username AND email AND phone"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
