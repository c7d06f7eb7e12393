"""
PasswordResetToken Entity

Single-use password reset tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - single-use password reset capability.

    Business Rules:
    - Expires 24 hours after issuance, never extended
    - Token is stored as SHA-256 hash of a secure random string
    - Single-use: is_used flips false -> true once, never back
    - A new issuance deletes the user's other live tokens
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id")
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    is_used: bool = Field(default=False)
    ip_address: Optional[str] = Field(default=None, max_length=50)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_user_id", "user_id"),
        Index("idx_password_reset_is_used", "is_used"),
    )
