"""Domain errors raised by user services and auth dependencies, rendered as plain text."""


class UserServiceError(Exception):
    """Base error: carries the plain-text message and the HTTP status it maps to."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(UserServiceError):
    """Malformed payload or an unresolvable reference (e.g. unknown role)."""


class ConflictError(UserServiceError):
    """A user with the same email already exists."""


class AuthenticationError(UserServiceError):
    """Bad credentials. Unknown email and wrong password share one message."""


class NotFoundError(UserServiceError):
    """Target user missing or soft-deleted. Status depends on the endpoint (400 or 404)."""


class AuthorizationError(UserServiceError):
    """Missing, invalid or insufficient auth token."""

    status_code = 401
