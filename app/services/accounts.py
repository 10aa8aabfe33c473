"""Account store: lookups, uniqueness and the public view of users."""

from sqlalchemy.orm import Session

from app.models import User
from app.schemas.auth import UserPublic
from app.services.roles import primary_role


def normalize_username(username: str) -> str:
    """Key used for lookups and the uniqueness constraint: trimmed, lower-cased."""
    return username.strip().lower()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Case-insensitive, whitespace-trimmed username match."""
    return (
        db.query(User)
        .filter(User.username_normalized == normalize_username(username))
        .first()
    )


def is_unique_username(db: Session, username: str) -> bool:
    return get_user_by_username(db, username) is None


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.username_normalized).all()


def create_user(
    db: Session,
    username: str,
    password_hash: str,
    name: str | None = None,
) -> User:
    """Add a user and flush so it gets an id. The caller commits."""
    user = User(
        username=username.strip(),
        username_normalized=normalize_username(username),
        name=name,
        password_hash=password_hash,
    )
    db.add(user)
    db.flush()
    return user


def to_public_view(user: User) -> UserPublic:
    """Map a User to the client-facing view; credential fields are never copied."""
    return UserPublic(
        id=user.id,
        username=user.username,
        name=user.name,
        role=primary_role(user),
    )
