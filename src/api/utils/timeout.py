import asyncio
from typing import Awaitable, TypeVar

from config import ApplicationConfig
from src.libs.result import Error
from src.api.error import ServerError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T]) -> T:
    """
    Bound a use case call by REQUEST_TIMEOUT_SECONDS.

    Raises:
        ServerError: REQUEST_TIMEOUT when the call does not finish in time
    """
    try:
        return await asyncio.wait_for(
            awaitable, timeout=ApplicationConfig.REQUEST_TIMEOUT_SECONDS
        )
    except asyncio.TimeoutError:
        raise ServerError(Error("REQUEST_TIMEOUT", "Request timed out"))
