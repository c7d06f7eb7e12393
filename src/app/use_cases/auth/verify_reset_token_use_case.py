"""
Verify Reset Token Use Case

Read-only check that a reset token can still be redeemed.
"""

from datetime import datetime
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.reset_token import hash_reset_token
from src.app.services.unit_of_work import UnitOfWork
from .dtos import VerifyResetTokenResponse


class VerifyResetTokenUseCase:
    """
    Use case for verifying a password reset token.

    Business Rules:
    - Unknown, used and expired tokens all get the same error
    - Nothing is modified, the check can be repeated
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[VerifyResetTokenResponse]:
        if not token:
            return Return.err(
                Error("VALIDATION_ERROR", "Reset token is missing, please request a new one")
            )

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_live(
                hash_reset_token(token), datetime.utcnow()
            )
            if reset_token is None:
                return Return.err(
                    Error(
                        "INVALID_OR_EXPIRED_TOKEN",
                        "The reset link is invalid or has expired, please request a new one",
                    )
                )

            # Read while the session is open; leaving the unit of work expires the row
            return Return.ok(
                VerifyResetTokenResponse(
                    message="Token is valid, please set a new password",
                    user_id=str(reset_token.user_id),
                )
            )
