"""User endpoints: registration (public), login, and admin-only user reads."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import auth_error_to_http, login_user, require_admin
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserPublic,
)
from app.services import auth as auth_service
from app.services.accounts import get_user_by_id, list_users, to_public_view
from app.services.auth import AuthError

router = APIRouter()


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register_user(
    body: RegisterRequest,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """
    Register a new account. Role defaults to "User" and is created if it does not exist yet.
    Responds 201 with a Location header pointing at GET /users/{id}.
    """
    try:
        user = auth_service.register(db, body, get_settings())
    except AuthError as e:
        raise auth_error_to_http(e) from e
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id).path)
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """Same as POST /auth/login."""
    return login_user(body, db)


@router.get("", response_model=list[UserPublic])
def get_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserPublic]:
    """List all users ordered by username (admin only)."""
    return [to_public_view(u) for u in list_users(db)]


@router.get("/{user_id}", response_model=UserPublic, name="get_user")
def get_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Get one user by id (admin only)."""
    user = get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with id {user_id} does not exist.",
        )
    return to_public_view(user)
