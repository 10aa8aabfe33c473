"""Request/response schemas for auth and user endpoints."""

from pydantic import BaseModel, Field

from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., max_length=PASSWORD_MAX_LEN, description="Password")


class RegisterRequest(BaseModel):
    """New account; role defaults to the configured default role when omitted."""

    username: str = Field(..., max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., max_length=PASSWORD_MAX_LEN, description="Password")
    name: str | None = Field(default=None, max_length=255, description="Display name")
    role: str | None = Field(default=None, max_length=64, description="Role name")


class UserPublic(BaseModel):
    """Account as returned to clients (no credential fields)."""

    id: int
    username: str
    name: str | None = None
    role: str


class LoginResponse(BaseModel):
    """JWT access token and the logged-in user returned after successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserPublic
    message: str


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) taken from verified token claims."""

    id: int
    username: str
    role: str
