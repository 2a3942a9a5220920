"""User account endpoints: signup, login, logout, list, get, update and soft delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.v1.auth import (
    get_current_user,
    get_token_service,
    require_admin,
    token_header,
    validate_object_id,
)
from app.core.config import settings
from app.core.database import get_db
from app.repositories.roles import RoleRepository
from app.repositories.users import UserRepository
from app.schemas.auth import CurrentUser
from app.schemas.user import UserRead
from app.services.tokens import TokenService
from app.services.users import LOGIN_OK, UserController

router = APIRouter()

JsonBody = Annotated[dict[str, Any] | None, Body()]


def get_user_controller(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> UserController:
    """Build a controller bound to the request's session."""
    return UserController(
        users=UserRepository(db),
        roles=RoleRepository(db),
        tokens=tokens,
    )


Controller = Annotated[UserController, Depends(get_user_controller)]


@router.post("/signup", response_class=PlainTextResponse)
def signup(controller: Controller, payload: JsonBody = None) -> str:
    """Create a user from firstname, lastname, username, email, password and role title."""
    return controller.signup(payload)


@router.post("/login", response_class=PlainTextResponse)
def login(controller: Controller, response: Response, payload: JsonBody = None) -> str:
    """
    Authenticate with email and password.
    The auth token is returned in the x-auth-token response header.
    """
    token = controller.login(payload)
    response.headers[settings.AUTH_TOKEN_HEADER] = token
    return LOGIN_OK


@router.post("/logout", response_class=PlainTextResponse)
def logout(
    controller: Controller,
    token: Annotated[str | None, Depends(token_header)],
) -> str:
    """Revoke the token sent with this request, if any."""
    return controller.logout(token)


@router.get("/", response_model=list[UserRead])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    controller: Controller,
) -> list[UserRead]:
    """List all users sorted by first name (admin only). Soft-deleted users are included."""
    return [UserRead.model_validate(u) for u in controller.get_all()]


@router.get("/{id}", response_model=UserRead)
def get_user(
    user_id: Annotated[int, Depends(validate_object_id)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    controller: Controller,
) -> UserRead:
    return UserRead.model_validate(controller.get_by_id(user_id))


@router.put("/{id}", response_model=UserRead)
def update_user(
    user_id: Annotated[int, Depends(validate_object_id)],
    controller: Controller,
    payload: JsonBody = None,
) -> UserRead:
    """Update firstname, lastname and/or password; omitted or empty fields are kept."""
    return UserRead.model_validate(controller.update(user_id, payload))


@router.delete("/{id}", response_model=UserRead)
def delete_user(
    user_id: Annotated[int, Depends(validate_object_id)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    controller: Controller,
) -> UserRead:
    """Soft-delete a user; the record is kept with deleted=true."""
    return UserRead.model_validate(controller.delete(user_id))
