"""Auth token issuing, verification and revocation (logout)."""

import logging
from datetime import UTC, datetime
from typing import Any

import jwt

from app.core.security import create_access_token, decode_access_token
from app.models import User
from app.repositories.tokens import RevokedTokenRepository

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Raised when a token cannot be decoded, has expired, or was revoked."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenService:
    """
    Issues signed tokens carrying the user id and role title, and keeps a
    deny-list so a logged-out token stops working before it expires.
    """

    def __init__(self, revoked_tokens: RevokedTokenRepository) -> None:
        self.revoked_tokens = revoked_tokens

    def issue(self, user: User) -> str:
        return create_access_token(sub=user.id, role=user.role.title)

    def verify(self, token: str) -> dict[str, Any]:
        """Return the token claims. Raises InvalidTokenError if bad, expired or revoked."""
        try:
            claims = decode_access_token(token)
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Token rejected: {e}") from e
        if self.revoked_tokens.is_revoked(claims["jti"]):
            raise InvalidTokenError("Token has been revoked")
        return claims

    def revoke(self, token: str) -> bool:
        """
        Add the token to the deny-list. Returns False when the token is not a
        valid live token, since there is nothing left to revoke.
        """
        try:
            claims = decode_access_token(token)
        except jwt.PyJWTError:
            return False
        expires_at = datetime.fromtimestamp(claims["exp"], UTC)
        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError):
            user_id = None
        self.revoked_tokens.add(claims["jti"], expires_at=expires_at, user_id=user_id)
        logger.info("Token revoked", extra={"user_id": user_id, "jti": claims["jti"]})
        return True
