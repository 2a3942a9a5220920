"""User account workflows: signup, login, logout, listing, retrieval, update and soft delete."""

import logging
from typing import Any

from app.core.security import hash_password, verify_password
from app.models import User
from app.repositories.roles import RoleRepository
from app.repositories.users import DuplicateEmailError, UserRepository
from app.services.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.services.tokens import TokenService
from app.services.validation import UserValidator

logger = logging.getLogger(__name__)

SIGNUP_OK = "New user created!!!"
LOGIN_OK = "User logged in"
LOGOUT_OK = "User logged out"

USER_EXISTS = "User already exist"
INVALID_ROLE = "Invalid role."
INVALID_CREDENTIALS = "Invalid email or password"
USER_NOT_FOUND = "The user with the given ID was not found."
USER_DOES_NOT_EXIST = "User does not exist"


class UserController:
    """
    Orchestrates the user endpoints.

    Collaborators are passed in rather than imported as globals so tests and
    scripts can build a controller around any session.
    """

    def __init__(
        self,
        users: UserRepository,
        roles: RoleRepository,
        tokens: TokenService,
        validator: UserValidator | None = None,
    ) -> None:
        self.users = users
        self.roles = roles
        self.tokens = tokens
        self.validator = validator or UserValidator()

    def signup(self, payload: Any) -> str:
        """Create a user. Any existing account with the email, deleted or not, blocks signup."""
        body, error = self.validator.validate_signup(payload)
        if error:
            raise ValidationError(error)

        if self.users.get_by_email(body.email) is not None:
            raise ConflictError(USER_EXISTS)

        role_id = self.roles.get_id_by_title(body.role)
        if role_id is None:
            raise ValidationError(INVALID_ROLE)

        try:
            user = self.users.create(
                firstname=body.firstname,
                lastname=body.lastname,
                username=body.username,
                email=body.email,
                password_hash=hash_password(body.password),
                role_id=role_id,
            )
        except DuplicateEmailError as e:
            # Lost a race with a concurrent signup for the same email.
            raise ConflictError(USER_EXISTS) from e

        logger.info("User created", extra={"user_id": user.id, "role": body.role})
        return SIGNUP_OK

    def login(self, payload: Any) -> str:
        """Check credentials and return a fresh auth token."""
        body, error = self.validator.validate_login(payload)
        if error:
            raise ValidationError(error)

        user = self.users.get_by_email(body.email)
        if user is None or user.deleted:
            logger.info("Login rejected: unknown or deleted account")
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not verify_password(body.password, user.password_hash):
            logger.info("Login rejected: wrong password", extra={"user_id": user.id})
            raise AuthenticationError(INVALID_CREDENTIALS)

        return self.tokens.issue(user)

    def logout(self, token: str | None) -> str:
        """Revoke the caller's token if one was sent. Always succeeds."""
        if token:
            self.tokens.revoke(token)
        return LOGOUT_OK

    def get_all(self) -> list[User]:
        """Every user sorted by first name, soft-deleted users included."""
        return self.users.list_by_firstname()

    def get_by_id(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None or user.deleted:
            raise NotFoundError(USER_NOT_FOUND, status_code=404)
        return user

    def update(self, user_id: int, payload: Any) -> User:
        """
        Update first name, last name and/or password.

        Omitted or empty values keep the stored value; the password is only
        re-hashed when a new one is supplied.
        """
        body, error = self.validator.validate_update(payload)
        if error:
            raise ValidationError(error)

        user = self.users.get_by_id(user_id)
        if user is None or user.deleted:
            raise NotFoundError(USER_DOES_NOT_EXIST)

        password_hash = hash_password(body.password) if body.password else user.password_hash
        user = self.users.update(
            user,
            firstname=body.firstname or user.firstname,
            lastname=body.lastname or user.lastname,
            password_hash=password_hash,
        )
        logger.info(
            "User updated",
            extra={"user_id": user.id, "password_changed": bool(body.password)},
        )
        return user

    def delete(self, user_id: int) -> User:
        """Soft-delete: flag the user as deleted. Deleting twice is rejected."""
        user = self.users.get_by_id(user_id)
        if user is None or user.deleted:
            raise NotFoundError(USER_DOES_NOT_EXIST)

        user = self.users.soft_delete(user)
        logger.info("User soft-deleted", extra={"user_id": user.id})
        return user
