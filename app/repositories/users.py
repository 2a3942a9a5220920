"""User repository: lookups, insert, field updates and the soft-delete flag."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User

logger = logging.getLogger(__name__)

# Columns the update path may touch.
UPDATABLE_FIELDS = frozenset({"firstname", "lastname", "password_hash"})


class DuplicateEmailError(Exception):
    """Raised when an insert violates the unique email index."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User with email {email!r} already exists")


class UserRepository:
    """CRUD over the users table. Every write commits before returning."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email, deleted or not."""
        return self.session.query(User).filter(User.email == email).first()

    def list_by_firstname(self) -> list[User]:
        """All users ordered by first name; soft-deleted rows are included."""
        return self.session.query(User).order_by(User.firstname, User.id).all()

    def create(
        self,
        *,
        firstname: str,
        lastname: str,
        username: str,
        email: str,
        password_hash: str,
        role_id: int,
    ) -> User:
        user = User(
            firstname=firstname,
            lastname=lastname,
            username=username,
            email=email,
            password_hash=password_hash,
            role_id=role_id,
            deleted=False,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Rejected duplicate email on insert")
            raise DuplicateEmailError(email) from e
        self.session.refresh(user)
        return user

    def update(self, user: User, **fields: Any) -> User:
        """Set the given columns on ``user`` in one commit."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        for name, value in fields.items():
            setattr(user, name, value)
        self.session.commit()
        self.session.refresh(user)
        return user

    def soft_delete(self, user: User) -> User:
        user.deleted = True
        self.session.commit()
        self.session.refresh(user)
        return user
