"""
User Entity

Fleet admin account record.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class User(SQLModel, table=True):
    """
    User entity - a fleet admin portal account.

    Business Rules:
    - Username is unique across all users
    - Password reset requires username, email and phone to match together
    - Password stored as bcrypt hash (cost factor 12)
    - password_changed_at invalidates admin sessions issued before it
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=100)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=50)
    password: str = Field(max_length=60)  # Bcrypt output is 60 chars

    password_changed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_identity", "username", "email", "phone"),)
