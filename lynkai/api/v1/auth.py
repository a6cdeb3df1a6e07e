"""Auth endpoints: register, verify email, login, refresh, logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from lynkai.api.v1.deps import get_session_service
from lynkai.api.v1.errors import raise_for_result
from lynkai.core.results import TokenPair
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
from lynkai.services.session import SessionService

router = APIRouter()

Service = Annotated[SessionService, Depends(get_session_service)]


def _tokens(pair: TokenPair) -> TokenPairResponse:
    return TokenPairResponse(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        token_type="bearer",
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, service: Service) -> RegisterResponse:
    """
    Create an unverified account and email a six-digit verification code.
    The account exists even if the mail could not be sent; use resend-verification.
    """
    result = service.register(body.username, body.email, body.password)
    raise_for_result(result)
    return RegisterResponse(user_id=result.value)


@router.post("/resend-verification", response_model=MessageResponse)
def resend_verification(body: ResendVerificationRequest, service: Service) -> MessageResponse:
    raise_for_result(service.resend_verification(body.email))
    return MessageResponse(message="Verification code resent successfully.")


@router.post("/verify-email", response_model=TokenPairResponse)
def verify_email(body: VerifyEmailRequest, service: Service) -> TokenPairResponse:
    """Confirm the emailed code; on success the caller is signed in straight away."""
    result = service.verify_email(body.email, body.code)
    raise_for_result(result)
    return _tokens(result.value)


@router.get("/check-verification", response_model=CheckVerificationResponse)
def check_verification(email: str, service: Service) -> CheckVerificationResponse:
    return CheckVerificationResponse(verified=service.is_verified(email))


@router.post("/login", response_model=TokenPairResponse)
def login(body: LoginRequest, service: Service) -> TokenPairResponse:
    """
    Authenticate with username or email and password.
    Ends every earlier session of this user. Send the access token as: Bearer <access_token>
    """
    result = service.login(body.username_or_email, body.password)
    raise_for_result(result)
    return _tokens(result.value)


@router.post("/refresh", response_model=TokenPairResponse)
def refresh(body: RefreshRequest, service: Service) -> TokenPairResponse:
    """Exchange a refresh token for a new pair. The presented token stops working."""
    result = service.refresh(body.refresh_token)
    raise_for_result(result)
    return _tokens(result.value)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(body: LogoutRequest, service: Service) -> None:
    """Revoke a refresh token. Always succeeds, including for unknown tokens."""
    service.logout(body.refresh_token)
