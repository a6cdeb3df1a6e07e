"""Map core error kinds to HTTP responses."""

from fastapi import HTTPException, status

from lynkai.core.results import ErrorKind, Result

ERROR_RESPONSES: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.DUPLICATE_USER: (status.HTTP_409_CONFLICT, "Username or email already in use."),
    ErrorKind.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid credentials."),
    ErrorKind.ACCOUNT_UNVERIFIED: (
        status.HTTP_403_FORBIDDEN,
        "Email not verified. Please verify your account before logging in.",
    ),
    ErrorKind.ACCOUNT_ALREADY_VERIFIED: (
        status.HTTP_400_BAD_REQUEST,
        "Account is already verified.",
    ),
    ErrorKind.USER_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "User not found."),
    ErrorKind.CODE_INVALID: (status.HTTP_400_BAD_REQUEST, "Invalid verification code."),
    ErrorKind.CODE_EXPIRED: (status.HTTP_400_BAD_REQUEST, "Verification code expired."),
    ErrorKind.TOKEN_INVALID: (status.HTTP_401_UNAUTHORIZED, "Invalid token."),
    ErrorKind.TOKEN_EXPIRED: (status.HTTP_401_UNAUTHORIZED, "Token expired."),
    ErrorKind.TOKEN_NOT_RECOGNIZED: (
        status.HTTP_401_UNAUTHORIZED,
        "Refresh token not recognized.",
    ),
}

_TOKEN_ERRORS = {
    ErrorKind.TOKEN_INVALID,
    ErrorKind.TOKEN_EXPIRED,
    ErrorKind.TOKEN_NOT_RECOGNIZED,
}


def http_error(kind: ErrorKind) -> HTTPException:
    status_code, message = ERROR_RESPONSES[kind]
    headers = {"WWW-Authenticate": "Bearer"} if kind in _TOKEN_ERRORS else None
    return HTTPException(
        status_code=status_code,
        detail={"code": kind.value, "message": message},
        headers=headers,
    )


def raise_for_result(result: Result) -> None:
    """Raise the HTTPException matching a failed result; no-op on success."""
    if result.error is not None:
        raise http_error(result.error)
