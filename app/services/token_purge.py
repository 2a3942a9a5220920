"""Token deny-list maintenance: delete revocations whose tokens have expired."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.repositories.tokens import RevokedTokenRepository

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def run_token_purge(
    session: Session, settings: "Settings", now: datetime | None = None
) -> int:
    """
    Delete deny-list rows for tokens that expired before ``now``.

    An expired token is rejected on its ``exp`` claim alone, so its row is dead
    weight. Returns the number of rows deleted. Idempotent.
    """
    if not settings.TOKEN_PURGE_ENABLED:
        logger.info("Token purge is disabled (TOKEN_PURGE_ENABLED=false); skipping.")
        return 0

    cutoff = now or datetime.now(UTC)
    deleted_count = RevokedTokenRepository(session).delete_expired(cutoff)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Token purge run: cutoff=%s, revocations_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
