from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.api.utils.timeout import with_timeout
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ValidateSessionUseCase, ValidateSessionResponse
from src.depends import get_session_claims, get_unit_of_work

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("/verify", status_code=status.HTTP_200_OK, response_model=ValidateSessionResponse)
async def verify_session(
    claims: dict = Depends(get_session_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Admin Session

    Login gate for admin pages. Returns the username and session expiry
    when the bearer token is still valid.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session, or session
          issued before the last password reset
        - 500 Internal Server Error: Server error
    """
    use_case = ValidateSessionUseCase(uow)
    result = await with_timeout(use_case.execute(claims))

    if result.is_err():
        error = result.error
        if error.code == "SESSION_INVALID":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
