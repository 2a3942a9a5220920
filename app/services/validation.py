"""Payload validation for user endpoints: check shape and report the first violation."""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.schemas.user import LoginRequest, SignupRequest, UserUpdateRequest


def _field_name(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else "value"


def format_error(error: dict[str, Any]) -> str:
    """Render one pydantic error as a short message naming the field, e.g. '"email" is required'."""
    field = _field_name(tuple(error.get("loc", ())))
    err_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if err_type == "missing":
        return f'"{field}" is required'
    if err_type == "extra_forbidden":
        return f'"{field}" is not allowed'
    if err_type == "string_type":
        return f'"{field}" must be a string'
    if err_type == "string_too_short":
        if ctx.get("min_length") == 1:
            return f'"{field}" is not allowed to be empty'
        return f'"{field}" length must be at least {ctx.get("min_length")} characters long'
    if err_type == "string_too_long":
        return (
            f'"{field}" length must be less than or equal to '
            f'{ctx.get("max_length")} characters long'
        )
    if err_type == "value_error":
        if field == "email":
            return '"email" must be a valid email'
        if "error" in ctx:
            return f'"{field}" {ctx["error"]}'
    if err_type in ("model_type", "dict_type"):
        return '"value" must be of type object'
    if err_type == "json_invalid":
        return "Invalid JSON body"
    return f'"{field}" {error.get("msg", "is invalid")}'


class UserValidator:
    """
    Validates user payloads against the request schemas.

    Each method returns ``(model, None)`` on success or ``(None, message)``
    with the first violation, so callers can reject input before any side
    effect.
    """

    def _validate(
        self, schema: type[BaseModel], payload: Any
    ) -> tuple[BaseModel | None, str | None]:
        try:
            return schema.model_validate(payload if payload is not None else {}), None
        except PydanticValidationError as e:
            errors = e.errors()
            return None, format_error(errors[0]) if errors else "Invalid payload"

    def validate_signup(self, payload: Any) -> tuple[SignupRequest | None, str | None]:
        return self._validate(SignupRequest, payload)  # type: ignore[return-value]

    def validate_login(self, payload: Any) -> tuple[LoginRequest | None, str | None]:
        return self._validate(LoginRequest, payload)  # type: ignore[return-value]

    def validate_update(self, payload: Any) -> tuple[UserUpdateRequest | None, str | None]:
        return self._validate(UserUpdateRequest, payload)  # type: ignore[return-value]
