"""Server-side ledger of issued refresh tokens, keyed by token hash."""

import base64
import hashlib
import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from lynkai.core.results import ErrorKind, Result
from lynkai.core.tokens import REFRESH_TOKEN_TTL, utcnow
from lynkai.models import RefreshToken

logger = logging.getLogger(__name__)


def hash_token(raw_token: str) -> str:
    """base64(SHA-256(raw_token)); the only form in which refresh tokens are stored."""
    digest = hashlib.sha256(raw_token.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


class RefreshTokenLedger:
    """
    Stores refresh tokens by hash and consumes them at most once.

    consume() is a single conditional DELETE, so of several concurrent calls
    presenting the same token exactly one sees a deleted row. The database
    row lock (or SQLite's write lock) serializes them.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self._clock = clock

    def store(self, user_id: int, raw_token: str) -> None:
        self.db.add(
            RefreshToken(
                user_id=user_id,
                hashed_token=hash_token(raw_token),
                expires_at=self._clock() + REFRESH_TOKEN_TTL,
            )
        )
        self.db.flush()

    def consume(self, user_id: int, raw_token: str) -> Result[None]:
        """
        Delete the (user_id, hash) record if it is live.

        TokenNotRecognized if no record exists (never issued, already rotated,
        logged out, or killed by a later login); TokenExpired if the record is
        present but past expiry. Lookup alone never deletes an expired record.
        """
        hashed = hash_token(raw_token)
        result = self.db.execute(
            delete(RefreshToken)
            .where(
                RefreshToken.user_id == user_id,
                RefreshToken.hashed_token == hashed,
                RefreshToken.expires_at > self._clock(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount >= 1:
            return Result.ok()

        stale = (
            self.db.query(RefreshToken.id)
            .filter(
                RefreshToken.user_id == user_id,
                RefreshToken.hashed_token == hashed,
            )
            .first()
        )
        if stale is not None:
            return Result.fail(ErrorKind.TOKEN_EXPIRED)
        logger.warning("Refresh token not recognized: user_id=%s", user_id)
        return Result.fail(ErrorKind.TOKEN_NOT_RECOGNIZED)

    def invalidate_all(self, user_id: int) -> int:
        """Delete every refresh record owned by user_id; returns how many were removed."""
        result = self.db.execute(
            delete(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def invalidate_by_raw_token(self, raw_token: str) -> int:
        """Delete the record for this token whoever owns it; unknown tokens are a no-op."""
        result = self.db.execute(
            delete(RefreshToken)
            .where(RefreshToken.hashed_token == hash_token(raw_token))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
