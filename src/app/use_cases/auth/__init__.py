"""
Authentication Use Cases

Password reset lifecycle and admin session validation.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .validate_session_use_case import ValidateSessionUseCase
from .dtos import (
    RequestPasswordResetResponse,
    VerifyResetTokenResponse,
    ConfirmPasswordResetResponse,
    ValidateSessionResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "ValidateSessionUseCase",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "VerifyResetTokenResponse",
    "ConfirmPasswordResetResponse",
    "ValidateSessionResponse",
]
