"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser
from app.schemas.health import HealthResponse
from app.schemas.user import LoginRequest, SignupRequest, UserRead, UserUpdateRequest

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "SignupRequest",
    "UserRead",
    "UserUpdateRequest",
]
