import hashlib
import secrets

# 32 random bytes -> 43 URL-safe characters
TOKEN_BYTES = 32


def generate_reset_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    """SHA-256 hex digest stored in place of the plain token"""
    return hashlib.sha256(token.encode()).hexdigest()
