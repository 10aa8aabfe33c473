"""JWT login and auth dependencies (get_current_user, require_role, require_admin)."""

from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from app.services import auth as auth_service
from app.services.auth import (
    AuthError,
    AuthValidationError,
    InvalidCredentialsError,
    RegistrationError,
    UserAlreadyExistsError,
    UsernameNotFoundError,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)

_ERROR_STATUS: dict[type[AuthError], int] = {
    AuthValidationError: status.HTTP_400_BAD_REQUEST,
    UserAlreadyExistsError: status.HTTP_400_BAD_REQUEST,
    UsernameNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    RegistrationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def auth_error_to_http(e: AuthError) -> HTTPException:
    """Map an auth service error to the HTTPException returned to the client."""
    status_code = _ERROR_STATUS.get(type(e), status.HTTP_400_BAD_REQUEST)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return HTTPException(status_code=status_code, detail=e.message, headers=headers)


def login_user(body: LoginRequest, db: Session) -> LoginResponse:
    """Run the login flow and translate its failures into HTTP errors."""
    try:
        return auth_service.login(db, body, get_settings())
    except AuthError as e:
        raise auth_error_to_http(e) from e


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT and the user's public view.
    Include the token in the Authorization header as: Bearer <token>
    """
    return login_user(body, db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the user its claims describe.

    Claims are trusted as issued (no database lookup), so a role change only
    takes effect after the user logs in again. Raises 401 if missing or invalid.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = int(payload["id"])
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser(
        id=user_id,
        username=str(payload.get("user") or ""),
        role=str(payload.get("role") or ""),
    )


def require_role(role: str) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that requires the token's role claim to equal role. Raises 403 otherwise."""

    def _require_role(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return current_user

    return _require_role


require_admin = require_role(get_settings().ADMIN_ROLE)


@router.get("/me", response_model=CurrentUser)
def read_current_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the identity carried by the presented token."""
    return current_user
