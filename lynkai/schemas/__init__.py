"""Pydantic request/response schemas."""

from lynkai.schemas.auth import (
    CheckVerificationResponse,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    TokenPairResponse,
    VerifyEmailRequest,
)
from lynkai.schemas.health import HealthResponse
from lynkai.schemas.users import ChangePasswordRequest, UpdateProfileRequest, UserProfile

__all__ = [
    "ChangePasswordRequest",
    "CheckVerificationResponse",
    "HealthResponse",
    "LoginRequest",
    "LogoutRequest",
    "MessageResponse",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "ResendVerificationRequest",
    "TokenPairResponse",
    "UpdateProfileRequest",
    "UserProfile",
    "VerifyEmailRequest",
]
