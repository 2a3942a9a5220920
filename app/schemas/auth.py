"""Schemas describing the authenticated caller."""

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Authenticated user resolved from the auth token, for dependency injection."""

    id: int
    username: str
    role: str
    token_id: str
