"""Per-request identity: resolved once from the bearer token, then passed explicitly."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from lynkai.core.tokens import TokenCodec

# Paths (relative to the API prefix) that never look at the Authorization header.
PUBLIC_PATHS = (
    "/auth/register",
    "/auth/login",
    "/auth/refresh",
    "/auth/verify-email",
    "/auth/resend-verification",
    "/auth/check-verification",
    "/auth/logout",
    "/health",
)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of one request."""

    user_id: int


def is_public_path(path: str, api_prefix: str) -> bool:
    if not path.startswith(api_prefix):
        return False
    relative = path[len(api_prefix):].rstrip("/")
    return any(relative == p or relative.startswith(p + "/") for p in PUBLIC_PATHS)


def resolve_identity(authorization: str | None, codec: TokenCodec) -> Identity | None:
    """
    Turn an Authorization header into an Identity, or None.

    Never raises: a missing, malformed, expired or wrong-type token simply
    leaves the request unauthenticated.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        return None
    result = codec.validate(token, "access")
    if not result.is_ok:
        return None
    return Identity(user_id=result.value)


def get_identity(request: Request) -> Identity | None:
    """Dependency: identity attached by the middleware, if any."""
    return getattr(request.state, "identity", None)


def require_identity(
    identity: Annotated[Identity | None, Depends(get_identity)],
) -> Identity:
    """Dependency: reject the request with 401 when no identity was attached."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity
