from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_identity(
        self, username: str, email: str, phone: str, for_update: bool = False
    ) -> Optional[User]:
        """
        Get the user matching all three identity fields.

        With for_update the row stays locked until the transaction ends, which
        serializes concurrent reset issuance for the same user.
        """
        stmt = select(User).where(
            User.username == username,
            User.email == email,
            User.phone == phone,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
