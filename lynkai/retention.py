"""
CLI entrypoint for the expired-credential purge. Run from cron, e.g.:

  python -m lynkai.retention

Or hourly: 0 * * * * cd /path/to/lynkai && .venv/bin/python -m lynkai.retention
"""

import logging
import sys

from lynkai.core.config import get_settings
from lynkai.core.database import session_scope
from lynkai.services.retention import run_retention

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Purge verification codes and refresh records past the grace window."""
    settings = get_settings()
    try:
        with session_scope() as db:
            codes_deleted, tokens_deleted = run_retention(db, settings)
    except Exception as e:
        logger.exception("Retention job failed: %s", e)
        return 1
    logger.info(
        "Retention completed: codes_deleted=%s, refresh_records_deleted=%s",
        codes_deleted,
        tokens_deleted,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
