from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.error import ClientError, ServerError
from src.api.utils.rate_limit import client_ip, enforce_rate_limit
from src.api.utils.timeout import with_timeout
from src.app.services.notifier import INotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetResponse,
    VerifyResetTokenResponse,
    ConfirmPasswordResetResponse,
)
from config import ApplicationConfig
from src.depends import get_notifier, get_unit_of_work

router = APIRouter(tags=["Password Reset"])


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    Fields are optional here so that missing values reach the use case and
    come back as VALIDATION_ERROR with the standard envelope.
    """

    username: Optional[str] = Field(None, description="Account username")
    email: Optional[str] = Field(None, description="Registered email")
    phone: Optional[str] = Field(None, description="Registered contact phone")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def forgot_password(
    body: ForgotPasswordRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Request Password Reset

    Issues a single-use reset token valid for 24 hours and emails the reset
    link. Rate limited per client IP.

    Raises:
        - 400 Bad Request: Missing fields or account details do not match
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: Email delivery failed or server error
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        token_ttl=timedelta(hours=ApplicationConfig.RESET_TOKEN_TTL_HOURS),
    )
    result = await with_timeout(
        use_case.execute(body.username, body.email, body.phone, ip_address=client_ip(request))
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "ACCOUNT_MISMATCH"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "DELIVERY_FAILED":
            raise ServerError(error, public_message=error.message)
        raise ServerError(error)

    return result.value


@router.get(
    "/reset-password/verify-token",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
)
async def verify_reset_token(
    token: Optional[str] = None, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Verify Reset Token

    Confirms the token is unused and unexpired and returns its owner's id.
    Read-only.

    Raises:
        - 400 Bad Request: Missing, unknown, used or expired token
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyResetTokenUseCase(uow)
    result = await with_timeout(use_case.execute(token))

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_OR_EXPIRED_TOKEN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class UpdatePasswordRequest(BaseModel):
    """Update password HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    token: Optional[str] = Field(None, description="Password reset token from email")
    user_id: Optional[str] = Field(None, alias="userId", description="Token owner id")
    new_password: Optional[str] = Field(None, alias="newPassword")
    confirm_password: Optional[str] = Field(None, alias="confirmPassword")


@router.post(
    "/reset-password/update",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def update_password(
    body: UpdatePasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset

    Redeems the token and replaces the password. The token is re-checked
    here even if it was verified before.

    Raises:
        - 400 Bad Request: Missing fields, password mismatch, weak password,
          or invalid/used/expired token
        - 404 Not Found: Token owner no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await with_timeout(
        use_case.execute(body.token, body.user_id, body.new_password, body.confirm_password)
    )

    if result.is_err():
        error = result.error
        if error.code in (
            "VALIDATION_ERROR",
            "PASSWORD_MISMATCH",
            "PASSWORD_POLICY",
            "INVALID_OR_EXPIRED_TOKEN",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
