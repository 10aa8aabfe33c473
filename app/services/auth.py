"""Login and registration flows: input checks, credential verification, role resolution, token issuance."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    hash_password,
    verify_password,
)
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserPublic
from app.services.accounts import (
    create_user,
    get_user_by_username,
    is_unique_username,
    to_public_view,
)
from app.services.roles import assign_role, primary_role

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

LOGIN_SUCCESS_MESSAGE = "User logged in successfully."


class AuthError(Exception):
    """Base for auth flow failures; message is safe to return to the client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthValidationError(AuthError):
    """Missing or malformed input (username or password)."""


class UsernameNotFoundError(AuthError):
    """Unknown username at login; only raised when AUTH_REVEAL_UNKNOWN_USERNAME is on."""


class InvalidCredentialsError(AuthError):
    """Wrong password, or unknown username when usernames are not revealed."""

    def __init__(self, message: str = "Invalid username or password.") -> None:
        super().__init__(message)


class UserAlreadyExistsError(AuthError):
    """Registration with a username that is already taken (case/whitespace-insensitive)."""

    def __init__(self, message: str = "User already exists.") -> None:
        super().__init__(message)


class RegistrationError(AuthError):
    """Persistence failed while registering; internals are logged, not returned."""

    def __init__(self, message: str = "Error registering user.") -> None:
        super().__init__(message)


def login(db: Session, body: LoginRequest, settings: "Settings") -> LoginResponse:
    """
    Authenticate username/password and issue a JWT.

    Steps, each a possible early exit: validate input, look up the account by
    normalized username, verify the password, resolve the role, issue the token.
    """
    if not body.username or not body.username.strip():
        raise AuthValidationError("Username is required.")
    if not body.password:
        raise AuthValidationError("Password is required.")

    user = get_user_by_username(db, body.username)
    if user is None:
        verify_password(body.password, DUMMY_PASSWORD_HASH)
        logger.info("Login failed: unknown username")
        if settings.AUTH_REVEAL_UNKNOWN_USERNAME:
            raise UsernameNotFoundError("Username not found.")
        raise InvalidCredentialsError()

    if not verify_password(body.password, user.password_hash):
        logger.info("Login failed: invalid password", extra={"user_id": user.id})
        raise InvalidCredentialsError()

    role = primary_role(user)
    token = create_access_token(user_id=user.id, username=user.username, role=role)
    logger.info("Login succeeded", extra={"user_id": user.id, "role": role})
    return LoginResponse(
        token=token,
        token_type="bearer",
        user=to_public_view(user),
        message=LOGIN_SUCCESS_MESSAGE,
    )


def register(db: Session, body: RegisterRequest, settings: "Settings") -> UserPublic:
    """
    Create an account and assign its role (DEFAULT_ROLE when none is given).

    The uniqueness pre-check is backed by the unique index on the normalized
    username; a concurrent duplicate that slips past it is reported as
    UserAlreadyExistsError when the commit hits the constraint.
    """
    if not body.username or not body.username.strip():
        raise AuthValidationError("Username is required.")
    if not body.password:
        raise AuthValidationError("Password is required.")

    if not is_unique_username(db, body.username):
        raise UserAlreadyExistsError()

    role_name = (body.role or "").strip() or settings.DEFAULT_ROLE
    password_hash = hash_password(body.password)
    try:
        user = create_user(db, body.username, password_hash, name=body.name)
        assign_role(db, user, role_name)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not is_unique_username(db, body.username):
            raise UserAlreadyExistsError() from e
        logger.exception("Registration failed on constraint violation")
        raise RegistrationError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Registration failed")
        raise RegistrationError() from e

    db.refresh(user)
    logger.info("Registered user", extra={"user_id": user.id, "role": role_name})
    return to_public_view(user)
