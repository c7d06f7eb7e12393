"""
Request Password Reset Use Case

Issues a single-use reset token and sends the reset link.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.notifier import INotifier
from src.app.services.reset_token import generate_reset_token, hash_reset_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PasswordResetToken
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Username, email and phone are all required and must match one user together
    - Mismatch gets one generic error, whichever field was wrong
    - Token is 32 random bytes, only its SHA-256 hash is stored
    - Token expires 24 hours after issuance
    - The user's other live tokens are deleted in the same transaction
    - The token is delivered only through the notifier, never returned
    - Rate limiting is handled at the API layer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotifier,
        token_ttl: timedelta = timedelta(hours=24),
    ):
        self.uow = uow
        self.notifier = notifier
        self.token_ttl = token_ttl

    async def execute(
        self,
        username: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        ip_address: Optional[str] = None,
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            username: Account username
            email: Account email
            phone: Account contact phone
            ip_address: Network origin of the request, stored for provenance

        Returns:
            Result with a generic confirmation, or Error

        Errors:
            - VALIDATION_ERROR: A field is missing or empty
            - ACCOUNT_MISMATCH: No user matches all three fields
            - DELIVERY_FAILED: The notifier could not send the reset link
        """
        if not username or not email or not phone:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Username, email and phone are required",
                )
            )

        async with self.uow:
            # Row lock serializes concurrent issuance for the same user
            user = await self.uow.users.get_by_identity(
                username, email, phone, for_update=True
            )
            if user is None:
                return Return.err(
                    Error(
                        "ACCOUNT_MISMATCH",
                        "Account details do not match our records, please check and try again",
                    )
                )

            reset_token = generate_reset_token()
            now = datetime.utcnow()

            await self.uow.password_reset_tokens.invalidate_live_for_user(user.id, now)
            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    user_id=user.id,
                    token_hash=hash_reset_token(reset_token),
                    is_used=False,
                    ip_address=ip_address,
                    expires_at=now + self.token_ttl,
                )
            )

            await self.uow.commit()

            recipient = user.email

        # The committed token is superseded by the next successful request
        # if delivery fails here.
        try:
            sent = await self.notifier.send_password_reset(recipient, reset_token)
        except Exception:
            logger.exception("Notifier raised while sending password reset email")
            sent = False

        if not sent:
            return Return.err(
                Error(
                    "DELIVERY_FAILED",
                    "Failed to send the reset email, please try again later",
                )
            )

        return Return.ok(
            RequestPasswordResetResponse(
                message=(
                    "A reset link has been sent to your registered email "
                    f"and is valid for {int(self.token_ttl.total_seconds() // 3600)} hours"
                ),
            )
        )
