"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field

from lynkai.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    USERNAME_PATTERN,
)


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        pattern=USERNAME_PATTERN,
        description="Username (no '@')",
    )
    email: EmailStr = Field(..., description="Email address the verification code is sent to")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class RegisterResponse(BaseModel):
    user_id: int
    message: str = "Registration successful! Please verify your email."


class LoginRequest(BaseModel):
    """Credentials for login; the identifier may be a username or an email."""

    username_or_email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class TokenPairResponse(BaseModel):
    """Access and refresh token returned by login, refresh and email verification."""

    access_token: str = Field(..., description="JWT access token (15 minutes)")
    refresh_token: str = Field(..., description="Single-use JWT refresh token (30 days)")
    token_type: str = Field(default="bearer", description="Token type")


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class VerifyEmailRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., pattern=r"^\d{6}$", description="Six-digit verification code")


class CheckVerificationResponse(BaseModel):
    verified: bool


class MessageResponse(BaseModel):
    message: str
