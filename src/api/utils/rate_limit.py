from fastapi import Depends, Request, status

from src.libs.result import Error
from src.api.error import ClientError
from src.app.services.rate_limiter import RateLimiter
from src.depends import get_rate_limiter


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(
    request: Request, limiter: RateLimiter = Depends(get_rate_limiter)
) -> None:
    """
    Rate limit dependency for password reset issuance.

    Raises:
        ClientError: 429 when the caller's window is exhausted
    """
    if not await limiter.hit(client_ip(request)):
        raise ClientError(
            Error("RATE_LIMITED", "Too many requests, please try again in an hour"),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
