from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def invalidate_live_for_user(self, user_id: UUID, now: datetime) -> int:
        """Delete the user's unused, unexpired tokens"""
        stmt = delete(PasswordResetToken).where(
            PasswordResetToken.user_id == user_id,
            PasswordResetToken.is_used == False,
            PasswordResetToken.expires_at > now,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_live(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        """Get an unused, unexpired token by token hash"""
        stmt = select(PasswordResetToken).where(
            PasswordResetToken.token_hash == token_hash,
            PasswordResetToken.is_used == False,
            PasswordResetToken.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_used(self, token_hash: str, user_id: UUID, now: datetime) -> bool:
        """Conditional update guarded by is_used == False"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.token_hash == token_hash,
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.is_used == False,
                PasswordResetToken.expires_at > now,
            )
            .values(is_used=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
