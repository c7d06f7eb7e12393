"""
Use Cases

Organized by domain folder:
- auth/: Password reset lifecycle and admin session validation
"""

from .auth import (
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    ValidateSessionUseCase,
)

__all__ = [
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "ValidateSessionUseCase",
]
