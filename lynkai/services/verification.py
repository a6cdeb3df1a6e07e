"""Short-lived numeric codes that gate email verification."""

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy import delete
from sqlalchemy.orm import Session

from lynkai.core.results import ErrorKind, Result
from lynkai.core.tokens import utcnow
from lynkai.models import VerificationCode

logger = logging.getLogger(__name__)

VERIFICATION_CODE_TTL = timedelta(minutes=10)
CODE_MIN = 100000
CODE_MAX = 999999


def generate_code() -> str:
    """Uniformly random six-digit code (100000-999999) from the OS CSPRNG."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


class VerificationCodeIssuer:
    """
    Issues and consumes verification codes.

    A matched code is consumed exactly once: the consuming DELETE is
    conditional on the code still being unexpired, so two concurrent
    verifications with the same code cannot both succeed.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self._clock = clock

    def issue(self, user_id: int) -> str:
        """Persist a new code for user_id and return it; delivery is the caller's job."""
        code = generate_code()
        self.db.add(
            VerificationCode(
                user_id=user_id,
                code=code,
                expires_at=self._clock() + VERIFICATION_CODE_TTL,
            )
        )
        self.db.flush()
        return code

    def revoke_all(self, user_id: int) -> int:
        result = self.db.execute(
            delete(VerificationCode)
            .where(VerificationCode.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def verify(self, user_id: int, code: str) -> Result[None]:
        """
        Consume the (user_id, code) record.

        CodeInvalid if no such record, CodeExpired if it exists but is past
        expiry; expired records are left in place for the retention job.
        """
        now = self._clock()
        result = self.db.execute(
            delete(VerificationCode)
            .where(
                VerificationCode.user_id == user_id,
                VerificationCode.code == code,
                VerificationCode.expires_at > now,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount >= 1:
            return Result.ok()

        stale = (
            self.db.query(VerificationCode.id)
            .filter(
                VerificationCode.user_id == user_id,
                VerificationCode.code == code,
            )
            .first()
        )
        if stale is not None:
            logger.info("Verification code expired: user_id=%s", user_id)
            return Result.fail(ErrorKind.CODE_EXPIRED)
        return Result.fail(ErrorKind.CODE_INVALID)
