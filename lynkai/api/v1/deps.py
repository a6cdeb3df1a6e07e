"""FastAPI dependencies that compose the services for one request."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from lynkai.core.config import get_settings
from lynkai.core.database import get_db
from lynkai.core.security import PasswordHasher
from lynkai.core.tokens import TokenCodec
from lynkai.services.credential_store import CredentialStore
from lynkai.services.notifier import VerificationDispatcher, notifier_from_settings
from lynkai.services.profile import ProfileService
from lynkai.services.session import SessionService, build_session_service


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide codec; the signing key is read once."""
    return TokenCodec.from_settings(get_settings())


@lru_cache
def get_dispatcher() -> VerificationDispatcher:
    settings = get_settings()
    return VerificationDispatcher(
        notifier_from_settings(settings), max_workers=settings.MAIL_WORKERS
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def get_session_service(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    dispatcher: Annotated[VerificationDispatcher, Depends(get_dispatcher)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> SessionService:
    return build_session_service(
        db,
        codec,
        dispatcher,
        hasher=hasher,
        resend_revokes_previous=get_settings().VERIFICATION_RESEND_REVOKES_PREVIOUS,
    )


def get_profile_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> ProfileService:
    return ProfileService(db, CredentialStore(db), hasher)
