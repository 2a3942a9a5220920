"""Request/response schemas for user account endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 5
PASSWORD_MAX_LENGTH = 255
ROLE_MAX_LENGTH = 64


class SignupRequest(BaseModel):
    """Payload for POST /users/signup. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    firstname: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    lastname: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    role: str = Field(..., min_length=1, max_length=ROLE_MAX_LENGTH)


class LoginRequest(BaseModel):
    """Credentials for login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)


class UserUpdateRequest(BaseModel):
    """
    Payload for PUT /users/{id}.

    Every field is optional. An omitted field or an empty string means "leave
    unchanged", so the length checks only apply to non-empty values. An explicit
    null is rejected as not a string.
    """

    model_config = ConfigDict(extra="forbid")

    firstname: str = Field(default=None, max_length=NAME_MAX_LENGTH)
    lastname: str = Field(default=None, max_length=NAME_MAX_LENGTH)
    password: str = Field(default=None, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("firstname", "lastname")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v and len(v) < NAME_MIN_LENGTH:
            raise ValueError(f"length must be at least {NAME_MIN_LENGTH} characters long")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if v and len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"length must be at least {PASSWORD_MIN_LENGTH} characters long")
        return v


class UserRead(BaseModel):
    """User as returned by the API. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    lastname: str
    username: str
    email: str
    role_id: int
    deleted: bool
