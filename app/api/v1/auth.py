"""Auth dependencies: object-id check, token authentication and admin authorization."""

import logging
from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.repositories.tokens import RevokedTokenRepository
from app.repositories.users import UserRepository
from app.schemas.auth import CurrentUser
from app.services.errors import AuthorizationError, NotFoundError
from app.services.tokens import InvalidTokenError, TokenService

logger = logging.getLogger(__name__)

token_header = APIKeyHeader(name=settings.AUTH_TOKEN_HEADER, auto_error=False)

NO_TOKEN = "Access denied. No token provided."
INVALID_TOKEN = "Invalid token."
ACCESS_DENIED = "Access denied."
INVALID_ID = "Invalid ID."

# Largest value the users.id INTEGER column can hold.
MAX_OBJECT_ID = 2_147_483_647


def validate_object_id(object_id: Annotated[str, Path(alias="id")]) -> int:
    """Dependency: path id must be a positive integer within the id column range. Raises 404 otherwise."""
    if not (object_id.isascii() and object_id.isdigit()):
        raise NotFoundError(INVALID_ID, status_code=404)
    if not 1 <= int(object_id) <= MAX_OBJECT_ID:
        raise NotFoundError(INVALID_ID, status_code=404)
    return int(object_id)


def get_token_service(db: Annotated[Session, Depends(get_db)]) -> TokenService:
    return TokenService(RevokedTokenRepository(db))


def get_current_user(
    token: Annotated[str | None, Depends(token_header)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid, unrevoked auth token for a live user.
    Raises 401 when no token is sent and 400 when the token is rejected.
    """
    if not token:
        raise AuthorizationError(NO_TOKEN, status_code=401)
    try:
        claims = tokens.verify(token)
        user_id = int(claims["sub"])
    except InvalidTokenError as e:
        logger.info("Auth token rejected: %s", e.message)
        raise AuthorizationError(INVALID_TOKEN, status_code=400) from e
    except (TypeError, ValueError) as e:
        raise AuthorizationError(INVALID_TOKEN, status_code=400) from e

    user = UserRepository(db).get_by_id(user_id)
    if user is None or user.deleted:
        raise AuthorizationError(INVALID_TOKEN, status_code=400)
    return CurrentUser(
        id=user.id,
        username=user.username,
        role=str(claims.get("role", "")),
        token_id=claims["jti"],
    )


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated user with the admin role. Raises 403 otherwise."""
    if current_user.role != settings.ADMIN_ROLE:
        raise AuthorizationError(ACCESS_DENIED, status_code=403)
    return current_user
