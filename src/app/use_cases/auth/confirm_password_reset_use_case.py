"""
Confirm Password Reset Use Case

Redeems a reset token and replaces the user's password.
"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.reset_token import hash_reset_token
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ConfirmPasswordResetResponse

# 8-20 characters, at least one letter and one digit
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d).{8,20}$")

INVALID_TOKEN_ERROR = Error(
    "INVALID_OR_EXPIRED_TOKEN",
    "The reset token is invalid or has expired, please request a new one",
)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - token, user_id, new_password and confirm_password are all required
    - new_password must equal confirm_password
    - Password must be 8-20 characters with at least one letter and one digit
    - Token is re-checked here regardless of any earlier verify call
    - The token is claimed with a conditional update, so of two concurrent
      redemptions only one succeeds and the other gets INVALID_OR_EXPIRED_TOKEN
    - Password is hashed with bcrypt (cost factor 12)
    - Token claim and password change commit in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _validate_password(self, password: str) -> Result[None]:
        if not PASSWORD_PATTERN.match(password):
            return Return.err(
                Error(
                    "PASSWORD_POLICY",
                    "Password must be 8-20 characters and contain letters and digits",
                )
            )
        return Return.ok(None)

    async def execute(
        self,
        token: Optional[str],
        user_id: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            user_id: Owner of the token, as returned by token verification
            new_password: New password to set
            confirm_password: Repeat of new_password

        Returns:
            Result with confirmation, or Error

        Errors:
            - VALIDATION_ERROR: A field is missing
            - PASSWORD_MISMATCH: Passwords differ
            - PASSWORD_POLICY: Password fails the strength rule
            - INVALID_OR_EXPIRED_TOKEN: Token unknown, used, expired or not owned by user_id
            - USER_NOT_FOUND: Token owner no longer exists
        """
        if not token or not user_id or not new_password or not confirm_password:
            return Return.err(Error("VALIDATION_ERROR", "All fields are required"))

        if new_password != confirm_password:
            return Return.err(
                Error(
                    "PASSWORD_MISMATCH",
                    "New password and confirmation do not match",
                )
            )

        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        try:
            owner_id = UUID(str(user_id))
        except ValueError:
            # Cannot own any token
            return Return.err(INVALID_TOKEN_ERROR)

        async with self.uow:
            claimed = await self.uow.password_reset_tokens.mark_used(
                hash_reset_token(token), owner_id, datetime.utcnow()
            )
            if not claimed:
                return Return.err(INVALID_TOKEN_ERROR)

            user = await self.uow.users.get_by_id(owner_id)
            if user is None:
                # Leaving the block without commit rolls back the claim
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            user.password = password_hash.decode()
            user.password_changed_at = datetime.utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

        return Return.ok(
            ConfirmPasswordResetResponse(
                message="Password has been reset, please log in with the new password",
            )
        )
