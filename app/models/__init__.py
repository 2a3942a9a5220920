"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.revoked_token import RevokedToken
from app.models.role import Role
from app.models.user import User

__all__ = ["Base", "RevokedToken", "Role", "User"]
