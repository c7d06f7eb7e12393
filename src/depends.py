from functools import lru_cache
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.libs.result import Error
from src.adapter.services.email_notifier import LoggingNotifier, SendGridNotifier
from src.adapter.services.memory_rate_counter_store import MemoryRateCounterStore
from src.adapter.services.redis_rate_counter_store import RedisRateCounterStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.services.notifier import INotifier
from src.app.services.rate_limiter import IRateCounterStore, RateLimiter

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_notifier() -> INotifier:
    if ApplicationConfig.NOTIFIER_BACKEND == "sendgrid":
        return SendGridNotifier(
            api_key=ApplicationConfig.SENDGRID_API_KEY,
            from_email=ApplicationConfig.EMAIL_FROM,
            frontend_url=ApplicationConfig.FRONTEND_URL,
        )
    return LoggingNotifier(frontend_url=ApplicationConfig.FRONTEND_URL)


def build_rate_counter_store() -> IRateCounterStore:
    if ApplicationConfig.CACHE_BACKEND == "memory":
        return MemoryRateCounterStore()
    return RedisRateCounterStore.from_url(ApplicationConfig.REDIS_URL)


@lru_cache
def get_rate_limiter() -> RateLimiter:
    return RateLimiter(
        build_rate_counter_store(),
        limit=ApplicationConfig.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS,
    )


async def get_session_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify the admin session JWT from the
    Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, username, iat, exp

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    payload = verify_jwt(credentials.credentials) if credentials else None

    if payload is None:
        raise ClientError(
            Error("SESSION_INVALID", "Session has expired or is not logged in, please log in again"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload
