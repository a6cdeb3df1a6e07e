"""Retention: purge verification codes and refresh records long past expiry."""

import logging
from datetime import datetime, timezone, timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from lynkai.models import RefreshToken, VerificationCode

if TYPE_CHECKING:
    from lynkai.core.config import Settings

logger = logging.getLogger(__name__)


def run_retention(
    session: Session, settings: "Settings", now: datetime | None = None
) -> tuple[int, int]:
    """
    Delete codes and refresh records that expired more than RETENTION_GRACE_HOURS ago.

    Expired rows are kept for the grace window so a late attempt still reports
    CodeExpired / TokenExpired rather than an unknown code or token.
    Returns (codes_deleted, refresh_records_deleted). Idempotent.
    """
    if not settings.RETENTION_ENABLED:
        logger.info("Retention is disabled (RETENTION_ENABLED=false); skipping.")
        return (0, 0)

    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(hours=settings.RETENTION_GRACE_HOURS)
    codes_deleted = (
        session.query(VerificationCode)
        .filter(VerificationCode.expires_at < cutoff)
        .delete(synchronize_session=False)
    )
    tokens_deleted = (
        session.query(RefreshToken)
        .filter(RefreshToken.expires_at < cutoff)
        .delete(synchronize_session=False)
    )
    session.commit()

    if codes_deleted or tokens_deleted:
        logger.info(
            "Retention run: cutoff=%s, codes_deleted=%s, refresh_records_deleted=%s",
            cutoff.isoformat(),
            codes_deleted,
            tokens_deleted,
        )
    return (codes_deleted, tokens_deleted)
