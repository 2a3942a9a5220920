"""Data access for users, roles and revoked tokens."""

from app.repositories.roles import RoleRepository
from app.repositories.tokens import RevokedTokenRepository
from app.repositories.users import DuplicateEmailError, UserRepository

__all__ = [
    "DuplicateEmailError",
    "RevokedTokenRepository",
    "RoleRepository",
    "UserRepository",
]
