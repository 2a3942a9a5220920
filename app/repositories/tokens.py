"""Persisted deny-list of revoked auth tokens."""

from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import RevokedToken


class RevokedTokenRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, jti: str, expires_at: datetime, user_id: int | None = None) -> None:
        """Record ``jti`` as revoked. Revoking the same token twice is a no-op."""
        if self.is_revoked(jti):
            return
        self.session.add(RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at))
        try:
            self.session.commit()
        except IntegrityError:
            # Concurrent logout with the same token already stored the row.
            self.session.rollback()

    def is_revoked(self, jti: str) -> bool:
        return self.session.get(RevokedToken, jti) is not None

    def delete_expired(self, now: datetime) -> int:
        """Delete rows whose token has expired by ``now``; return the count. Caller commits."""
        return (
            self.session.query(RevokedToken)
            .filter(RevokedToken.expires_at < now)
            .delete(synchronize_session="fetch")
        )
