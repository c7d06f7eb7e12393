from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def invalidate_live_for_user(self, user_id: UUID, now: datetime) -> int:
        """Delete the user's unused, unexpired tokens. Returns rows removed"""
        pass

    @abstractmethod
    async def get_live(
        self, token_hash: str, now: datetime
    ) -> Optional[PasswordResetToken]:
        """Get an unused, unexpired token by token hash"""
        pass

    @abstractmethod
    async def mark_used(self, token_hash: str, user_id: UUID, now: datetime) -> bool:
        """
        Flip is_used to True if the token is still live and owned by user_id.

        Returns True only for the caller whose update changed the row.
        """
        pass
