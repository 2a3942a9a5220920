"""ORM model for the token deny-list written by logout."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class RevokedToken(Base):
    """
    One row per logged-out token, keyed by its ``jti`` claim.

    A row only matters until ``expires_at``; after that the token is rejected
    on expiry alone and the row can be purged.
    """

    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    user_id = Column(Integer, nullable=True, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    revoked_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
