"""
Validate Session Use Case

Server-side check behind the admin pages' login gate. Admin pages call it
instead of trusting whatever the browser has cached.
"""

from datetime import UTC, datetime
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ValidateSessionResponse

SESSION_INVALID_ERROR = Error(
    "SESSION_INVALID", "Session has expired or is not logged in, please log in again"
)


class ValidateSessionUseCase:
    """
    Use case for validating an admin session token.

    Business Rules:
    - Session JWT signature and expiry are checked by the API layer
    - The user must still exist
    - Sessions issued before the user's last password change are rejected
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, claims: dict) -> Result[ValidateSessionResponse]:
        try:
            user_id = UUID(str(claims["user_id"]))
            issued_at = int(claims["iat"])
            expires_at = datetime.fromtimestamp(int(claims["exp"]), UTC)
        except (KeyError, TypeError, ValueError, AttributeError):
            return Return.err(SESSION_INVALID_ERROR)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(SESSION_INVALID_ERROR)

            if user.password_changed_at is not None:
                changed_at = int(user.password_changed_at.replace(tzinfo=UTC).timestamp())
                if issued_at < changed_at:
                    return Return.err(SESSION_INVALID_ERROR)

            return Return.ok(
                ValidateSessionResponse(
                    message="Session is valid",
                    username=user.username,
                    expires_at=expires_at,
                )
            )
