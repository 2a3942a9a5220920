"""Shared fixtures for tests: an in-memory user store and payload builders."""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import create_session_factory
from app.models import Base, Role
from app.repositories.roles import RoleRepository
from app.repositories.tokens import RevokedTokenRepository
from app.repositories.users import UserRepository
from app.services.tokens import TokenService
from app.services.users import UserController

SEED_ROLES = ("admin", "user")


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory SQLite database with all tables and the seeded roles."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = create_session_factory(engine)
    with factory() as session:
        session.add_all([Role(title=title) for title in SEED_ROLES])
        session.commit()
    return factory


def make_controller(session: Session) -> UserController:
    return UserController(
        users=UserRepository(session),
        roles=RoleRepository(session),
        tokens=TokenService(RevokedTokenRepository(session)),
    )


def signup_payload(**overrides: Any) -> dict[str, Any]:
    """Valid signup body; override any field."""
    payload: dict[str, Any] = {
        "firstname": "Alice",
        "lastname": "Smith",
        "username": "alice",
        "email": "a@x.com",
        "password": "Secret1",
        "role": "admin",
    }
    payload.update(overrides)
    return payload
