"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes for the password reset and session use cases.
Field aliases match the admin portal's camelCase JSON.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    success: bool = True
    message: str


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    user_id: str = Field(alias="userId")


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    success: bool = True
    message: str


class ValidateSessionResponse(BaseModel):
    """Response for validate session use case"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    username: str
    expires_at: datetime = Field(alias="expiresAt")
