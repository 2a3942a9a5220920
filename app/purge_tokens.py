"""
CLI entrypoint for the token deny-list purge. Run from cron, e.g.:

  python -m app.purge_tokens

Or hourly: 0 * * * * cd /path/to/userbase && .venv/bin/python -m app.purge_tokens
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.token_purge import run_token_purge

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Delete revoked-token rows whose tokens have already expired."""
    settings = get_settings()
    db = SessionLocal()
    try:
        deleted = run_token_purge(db, settings)
        logger.info("Token purge completed: revocations_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Token purge failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
