from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_session_token(user_id: UUID, username: str, expires_delta: timedelta) -> str:
    """
    Create admin session JWT

    Args:
        user_id: User UUID
        username: Admin username shown by the portal
        expires_delta: Session lifetime

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "username": username,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
