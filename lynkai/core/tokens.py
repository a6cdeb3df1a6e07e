"""Signing and validation of access and refresh tokens (JWT, HMAC)."""

import base64
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

import jwt

from lynkai.core.results import ErrorKind, Result

TokenType = Literal["access", "refresh"]

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=30)

TOKEN_TYPE_CLAIM = "type"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Stateless codec for bearer tokens.

    Both token kinds carry sub (user id as a decimal string), type, iat, exp
    and a random jti, so two tokens minted in the same second still differ.
    The signing key is fixed for the lifetime of the codec.
    """

    def __init__(
        self,
        secret_b64: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._key = base64.b64decode(secret_b64)
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Any) -> "TokenCodec":
        return cls(settings.JWT_SECRET.get_secret_value(), settings.JWT_ALGORITHM)

    def _issue(self, user_id: int, token_type: TokenType, ttl: timedelta) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(user_id),
            TOKEN_TYPE_CLAIM: token_type,
            "iat": now,
            "exp": now + ttl,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._key, algorithm=self._algorithm)

    def issue_access(self, user_id: int) -> str:
        return self._issue(user_id, "access", ACCESS_TOKEN_TTL)

    def issue_refresh(self, user_id: int) -> str:
        return self._issue(user_id, "refresh", REFRESH_TOKEN_TTL)

    def validate(self, token: str, expected_type: TokenType) -> Result[int]:
        """
        Verify signature, expiry and type claim; return the user id from sub.

        Expired tokens fail with TokenExpired; everything else that is wrong
        with the token (signature, structure, type, non-integer subject) fails
        with TokenInvalid.
        """
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            return Result.fail(ErrorKind.TOKEN_EXPIRED)
        except jwt.PyJWTError:
            return Result.fail(ErrorKind.TOKEN_INVALID)

        if payload.get(TOKEN_TYPE_CLAIM) != expected_type:
            return Result.fail(ErrorKind.TOKEN_INVALID)
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            return Result.fail(ErrorKind.TOKEN_INVALID)
        return Result.ok(user_id)
