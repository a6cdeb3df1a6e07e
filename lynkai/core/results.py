"""Outcome values for credential and session operations.

Every expected failure of a core operation is one of the ``ErrorKind`` values
below and travels back to the caller inside a ``Result`` instead of being
raised. Storage errors are not part of this taxonomy and still propagate.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Terminal failure kinds; none of them is retried internally."""

    DUPLICATE_USER = "DuplicateUser"
    INVALID_CREDENTIALS = "InvalidCredentials"
    ACCOUNT_UNVERIFIED = "AccountUnverified"
    ACCOUNT_ALREADY_VERIFIED = "AccountAlreadyVerified"
    USER_NOT_FOUND = "UserNotFound"
    CODE_INVALID = "CodeInvalid"
    CODE_EXPIRED = "CodeExpired"
    TOKEN_INVALID = "TokenInvalid"
    TOKEN_EXPIRED = "TokenExpired"
    TOKEN_NOT_RECOGNIZED = "TokenNotRecognized"


class AuthError(Exception):
    """Raised by Result.unwrap() when the result carries an error kind."""

    def __init__(self, kind: ErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.value)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an error kind, never both."""

    value: T | None = None
    error: ErrorKind | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind) -> "Result[T]":
        return cls(error=kind)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise AuthError(self.error)
        return self.value  # type: ignore[return-value]


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token issued together."""

    access_token: str
    refresh_token: str
